"""
Machine configuration schema using Pydantic models.

A configuration names the initial state and, for every state, the events it
accepts and the state each event leads to. Models are frozen once validated:
fields cannot be reassigned, and the machine only ever reads the mappings.

Example YAML:
```yaml
name: turnstile
initial: locked

states:
  locked:
    transitions:
      coin: unlocked
  unlocked:
    transitions:
      push: locked
```

Transition targets are not cross-checked against ``states``. A target that
names no configured state is reported by ``dangling_targets()`` and only
matters once the transition is triggered.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _check_identifier(value: Any, kind: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{kind} identifier must be a non-empty string: {value!r}")
    return value


class StateDefinition(BaseModel):
    """A single state and its outgoing transitions (event -> target state)."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    transitions: Dict[str, str] = Field(default_factory=dict)

    @field_validator("transitions", mode="before")
    @classmethod
    def allow_empty_transitions(cls, v: Any) -> Any:
        """A bare ``transitions:`` key in YAML means no transitions."""
        return {} if v is None else v

    @field_validator("transitions")
    @classmethod
    def validate_transitions(cls, v: Dict[str, str]) -> Dict[str, str]:
        for event, target in v.items():
            _check_identifier(event, "Event")
            _check_identifier(target, "State")
        return v

    def has_event(self, event: str) -> bool:
        return isinstance(event, str) and event in self.transitions

    def target(self, event: str) -> Optional[str]:
        """Get the target state for an event, or None if undefined."""
        return self.transitions.get(event) if isinstance(event, str) else None


class MachineConfig(BaseModel):
    """
    Complete machine configuration.

    Supplied once to a StateMachine and never mutated afterwards. State
    order follows the order of the source mapping.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None

    initial: str = Field(..., min_length=1)
    states: Dict[str, StateDefinition]

    @field_validator("states", mode="before")
    @classmethod
    def allow_bare_states(cls, v: Any) -> Any:
        """Treat ``state:`` with no body as a state without transitions."""
        if isinstance(v, Mapping):
            return {k: ({} if body is None else body) for k, body in v.items()}
        return v

    @field_validator("states")
    @classmethod
    def validate_states(
        cls, v: Dict[str, StateDefinition]
    ) -> Dict[str, StateDefinition]:
        for name in v:
            _check_identifier(name, "State")
        return v

    def state_names(self) -> List[str]:
        """Get all configured state identifiers."""
        return list(self.states.keys())

    def has_state(self, name: str) -> bool:
        return isinstance(name, str) and name in self.states

    def get_state(self, name: str) -> Optional[StateDefinition]:
        """Get state definition by name."""
        return self.states.get(name) if isinstance(name, str) else None

    def states_with_event(self, event: str) -> List[str]:
        """Get the states whose transition table defines ``event``."""
        return [name for name, state in self.states.items() if state.has_event(event)]

    def initial_is_defined(self) -> bool:
        return self.initial in self.states

    def dangling_targets(self) -> List[Tuple[str, str, str]]:
        """
        Find transitions that lead to unconfigured states.

        Returns:
            List of (state, event, target) tuples
        """
        return [
            (name, event, target)
            for name, state in self.states.items()
            for event, target in state.transitions.items()
            if target not in self.states
        ]
