"""
Turnstile quickstart.

Builds the light switch machine from its YAML file, walks it forward with
events, then steps back and forth through the undo/redo history.

Run:
  python examples/quickstart/quickstart.py
"""

import logging
from pathlib import Path

from turnstile import InvalidEventError, StateMachine

HERE = Path(__file__).resolve().parent
CONFIG = HERE.parent / "light_switch" / "light_switch.yaml"


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(message)s")

    machine = StateMachine.from_file(CONFIG)
    print(f"start: {machine.get_state()}")

    machine.trigger("turnOn").trigger("turnOff")
    print(f"after turnOn, turnOff: {machine.get_state()}")

    while machine.undo():
        print(f"undo -> {machine.get_state()}")
    print(f"undo again: {machine.undo()}")

    machine.redo()
    print(f"redo -> {machine.get_state()}")

    try:
        machine.trigger("turnOn")
    except InvalidEventError as e:
        print(f"rejected: {e} (events here: {machine.get_events()})")

    print(f"states handling 'turnOff': {machine.get_states('turnOff')}")


if __name__ == "__main__":
    main()
