"""Pytest fixtures for Turnstile tests."""

import pytest
from pathlib import Path


@pytest.fixture(autouse=True)
def clean_turnstile_env(monkeypatch):
    """Keep host TURNSTILE_* variables from leaking into settings."""
    for var in (
        "TURNSTILE_CONFIG",
        "TURNSTILE_STRICT_TARGETS",
        "TURNSTILE_HISTORY_LIMIT",
        "TURNSTILE_LOG_LEVEL",
        "TURNSTILE_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def examples_dir() -> Path:
    """Get path to examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def light_switch_path(examples_dir: Path) -> Path:
    return examples_dir / "light_switch" / "light_switch.yaml"


@pytest.fixture
def gate_path(examples_dir: Path) -> Path:
    """Coin gate machine; its 'escalate' transition leads to an unconfigured state."""
    return examples_dir / "turnstile_gate" / "turnstile_gate.json"


@pytest.fixture
def switch_config_dict():
    """Minimal on/off machine as dict."""
    return {
        "initial": "off",
        "states": {
            "off": {"transitions": {"turnOn": "on"}},
            "on": {"transitions": {"turnOff": "off"}},
        },
    }


@pytest.fixture
def workflow_config_dict():
    """Four-state machine with shared events and a dangling target."""
    return {
        "name": "review",
        "initial": "draft",
        "states": {
            "draft": {"transitions": {"submit": "review", "archive": "archived"}},
            "review": {
                "transitions": {
                    "approve": "published",
                    "reject": "draft",
                    "archive": "archived",
                }
            },
            "published": {"transitions": {"archive": "archived", "retract": "limbo"}},
            "archived": {"transitions": {}},
        },
    }


@pytest.fixture
def switch(switch_config_dict):
    from turnstile.machine import StateMachine

    return StateMachine(switch_config_dict)


@pytest.fixture
def workflow(workflow_config_dict):
    from turnstile.machine import StateMachine

    return StateMachine(workflow_config_dict)
