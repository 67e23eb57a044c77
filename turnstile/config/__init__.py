"""Configuration management for Turnstile."""

from turnstile.config.settings import (
    MachineSettings,
    YamlConfigSource,
)

__all__ = [
    "MachineSettings",
    "YamlConfigSource",
]
