"""
Turnstile - finite state machine engine with undo/redo history.

A machine is built from a declarative configuration naming the initial
state and, per state, the events it accepts and where they lead. The
machine tracks the current state and keeps undo/redo stacks of visited
states.

Quick Start:
    ```python
    from turnstile import StateMachine

    machine = StateMachine({
        "initial": "off",
        "states": {
            "off": {"transitions": {"turnOn": "on"}},
            "on": {"transitions": {"turnOff": "off"}},
        },
    })
    machine.trigger("turnOn")
    machine.get_state()         # "on"
    machine.undo()              # True
    machine.get_states("turnOn")  # ["off"]
    ```

    Or from a file:
    ```python
    machine = StateMachine.from_file("light_switch.yaml")
    ```

Behaviour is tuned by passing MachineSettings explicitly. A machine built
without settings ignores TURNSTILE_* env vars and turnstile.yaml:
    ```python
    from turnstile import MachineSettings

    # Reads TURNSTILE_* env vars, turnstile.yaml and .env
    machine = StateMachine(config, settings=MachineSettings())

    # Or set values directly
    machine = StateMachine(config, settings=MachineSettings(strict_targets=True))
    ```
"""

__version__ = "0.1.0"

from turnstile.config.settings import MachineSettings
from turnstile.exceptions import (
    ConfigError,
    InvalidEventError,
    InvalidStateError,
    MachineError,
)
from turnstile.machine import StateMachine
from turnstile.parser import MachineParser
from turnstile.schema import MachineConfig, StateDefinition

__all__ = [
    # Version
    "__version__",
    # Machine
    "StateMachine",
    # Configuration
    "MachineConfig",
    "StateDefinition",
    "MachineParser",
    "MachineSettings",
    # Errors
    "MachineError",
    "ConfigError",
    "InvalidStateError",
    "InvalidEventError",
]
