"""
Finite state machine with undo/redo history.

Tracks the current state of a configured machine with:
- Explicit state changes and event-driven transitions
- An undo stack of previously active states
- A redo stack of undone states, cleared by every forward move
"""

import logging
from collections import deque
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from turnstile.config.settings import MachineSettings
from turnstile.exceptions import ConfigError, InvalidEventError, InvalidStateError
from turnstile.parser import MachineParser
from turnstile.schema import MachineConfig

logger = logging.getLogger(__name__)


class StateMachine:
    """
    State machine over a fixed configuration.

    Not thread-safe: a machine is meant to be owned by a single caller.
    Failed operations leave the current state and both stacks untouched.
    Settings apply only when passed; without them the machine uses lenient
    targets and unbounded history regardless of the environment.

    Example:
        ```python
        from turnstile import StateMachine

        machine = StateMachine({
            "initial": "off",
            "states": {
                "off": {"transitions": {"turnOn": "on"}},
                "on": {"transitions": {"turnOff": "off"}},
            },
        })

        machine.trigger("turnOn").trigger("turnOff")
        machine.undo()        # True, back to "on"
        machine.get_state()   # "on"
        ```
    """

    def __init__(
        self,
        config: Union[MachineConfig, Mapping[str, Any], None],
        settings: Optional[MachineSettings] = None,
    ):
        if config is None:
            raise ConfigError("Config is not defined")
        if not isinstance(config, MachineConfig):
            config = MachineParser.parse_dict(config)

        self.config = config
        self._strict_targets = settings.strict_targets if settings else False
        history_limit = settings.history_limit if settings else None

        self._state: str = config.initial
        self._undo: deque[str] = deque(maxlen=history_limit)
        self._redo: deque[str] = deque(maxlen=history_limit)

        if not config.initial_is_defined():
            logger.warning(f"Initial state '{config.initial}' is not a configured state")
        for state, event, target in config.dangling_targets():
            logger.warning(
                f"Transition '{state}' --{event}--> '{target}' leads to an "
                f"unconfigured state"
            )

        logger.info(
            f"StateMachine initialized{f' for {config.name!r}' if config.name else ''} "
            f"with {len(config.states)} states, initial '{config.initial}'"
        )

    @classmethod
    def from_file(
        cls, path: Union[str, Path], settings: Optional[MachineSettings] = None
    ) -> "StateMachine":
        """Build a machine from a YAML or JSON configuration file."""
        return cls(MachineParser.parse_file(path), settings=settings)

    @property
    def initial(self) -> str:
        return self.config.initial

    @property
    def state(self) -> str:
        return self._state

    @property
    def history(self) -> Tuple[str, ...]:
        """Undo stack snapshot, oldest first."""
        return tuple(self._undo)

    @property
    def redo_history(self) -> Tuple[str, ...]:
        """Redo stack snapshot, oldest first."""
        return tuple(self._redo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def get_state(self) -> str:
        """Get the active state."""
        return self._state

    def change_state(self, state: str) -> "StateMachine":
        """
        Go to the given state.

        Raises:
            InvalidStateError: If the state is not configured
        """
        if not self.config.has_state(state):
            raise InvalidStateError("No such state", state=state)
        self._move(state)
        return self

    def trigger(self, event: str) -> "StateMachine":
        """
        Change state according to the current state's transition for ``event``.

        The target is entered as-is even when it is not a configured state,
        unless strict targets are enabled.

        Raises:
            InvalidEventError: If the current state does not define ``event``
            InvalidStateError: If strict targets are enabled and the target
                is not configured
        """
        current = self.config.get_state(self._state)
        target = current.target(event) if current else None
        if target is None:
            raise InvalidEventError(
                "No such event for current state", event=event, current=self._state
            )
        if self._strict_targets and not self.config.has_state(target):
            raise InvalidStateError(
                f"Transition '{event}' leads to unknown state '{target}'",
                state=target,
            )
        self._move(target, event)
        return self

    def reset(self) -> "StateMachine":
        """Return to the initial state, recording the move in history."""
        self._move(self.config.initial, "reset")
        return self

    def get_states(self, event: Optional[str] = None) -> List[str]:
        """
        Get configured states.

        Args:
            event: If given, only states that define a transition for it

        Returns:
            State identifiers in configuration order
        """
        if event is None:
            return self.config.state_names()
        return self.config.states_with_event(event)

    def get_events(self) -> List[str]:
        """Get the events the current state accepts."""
        current = self.config.get_state(self._state)
        return list(current.transitions) if current else []

    def undo(self) -> bool:
        """
        Go back to the previous state.

        Returns:
            False if there is nothing to undo
        """
        if not self._undo:
            return False
        self._redo.append(self._state)
        previous, self._state = self._state, self._undo.pop()
        logger.debug(f"Undo: '{previous}' -> '{self._state}'")
        return True

    def redo(self) -> bool:
        """
        Re-apply the most recently undone state.

        Returns:
            False if there is nothing to redo
        """
        if not self._redo:
            return False
        self._undo.append(self._state)
        previous, self._state = self._state, self._redo.pop()
        logger.debug(f"Redo: '{previous}' -> '{self._state}'")
        return True

    def clear_history(self) -> None:
        """Forget both undo and redo history."""
        self._undo.clear()
        self._redo.clear()
        logger.debug("History cleared")

    def _move(self, target: str, via: Optional[str] = None) -> None:
        self._undo.append(self._state)
        self._redo.clear()
        previous, self._state = self._state, target
        logger.debug(f"'{previous}' -> '{target}'" + (f" ({via})" if via else ""))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self._state!r}, "
            f"undo={len(self._undo)}, redo={len(self._redo)})"
        )
