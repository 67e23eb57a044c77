"""Error kinds raised by the state machine and its configuration loaders."""

from typing import Optional


class MachineError(Exception):
    """Base class for all state machine errors."""


class ConfigError(MachineError, ValueError):
    """Raised when a machine configuration is missing or malformed."""


class InvalidStateError(MachineError):
    """Raised when a state identifier is not part of the configuration."""

    def __init__(self, message: str, state: Optional[str] = None):
        super().__init__(message)
        self.state = state


class InvalidEventError(MachineError):
    """Raised when an event is not defined for the current state."""

    def __init__(
        self,
        message: str,
        event: Optional[str] = None,
        current: Optional[str] = None,
    ):
        super().__init__(message)
        self.event = event
        self.current = current
