"""
Turnstile runtime settings using Pydantic Settings.

Settings can be provided via:
1. Direct instantiation
2. turnstile.yaml settings file
3. TURNSTILE_* environment variables
4. .env file

Priority (highest wins): init kwargs > turnstile.yaml > env vars > .env > defaults

Example turnstile.yaml:
    strict_targets: true
    history_limit: 100
    log_level: DEBUG

These settings tune machine behaviour; they are separate from the machine
configuration (states and transitions) a StateMachine is built from.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger(__name__)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads from a turnstile.yaml file.

    Discovers the file at:
    1. Explicit path passed via _config_path init kwarg
    2. $TURNSTILE_CONFIG env var
    3. ./turnstile.yaml
    4. ./turnstile.yml
    """

    def __init__(
        self, settings_cls: Type[BaseSettings], config_path: Optional[str] = None
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._yaml_data: Dict[str, Any] = {}
        self._load()

    def _discover_config_file(self) -> Optional[Path]:
        """Find the settings file to load."""
        if self._config_path:
            p = Path(self._config_path)
            return p if p.is_file() else None

        env_path = os.environ.get("TURNSTILE_CONFIG")
        if env_path:
            p = Path(env_path)
            return p if p.is_file() else None

        for name in ("turnstile.yaml", "turnstile.yml"):
            p = Path(name)
            if p.is_file():
                return p

        return None

    def _load(self) -> None:
        path = self._discover_config_file()
        if path is None:
            return

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            self._yaml_data = data if isinstance(data, dict) else {}
            logger.debug(f"Loaded settings from {path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings from {path}: {e}")
            self._yaml_data = {}

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        value = self._yaml_data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return {
            name: self._yaml_data[name]
            for name in self.settings_cls.model_fields
            if self._yaml_data.get(name) is not None
        }


class MachineSettings(BaseSettings):
    """
    Behavioural settings for a StateMachine.

    All settings can be overridden via environment variables with the
    TURNSTILE_ prefix, e.g. TURNSTILE_STRICT_TARGETS=true.
    """

    model_config = SettingsConfigDict(
        env_prefix="TURNSTILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Path to turnstile.yaml (set via _config_path kwarg, not a real setting field)
    _config_path: Optional[str] = None

    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Reject transitions whose target is not a configured state
    strict_targets: bool = False

    # Maximum entries kept on each history stack; None keeps everything
    history_limit: Optional[int] = Field(default=None, ge=1)

    def __init__(self, _config_path: Optional[str] = None, **kwargs: Any):
        self.__class__._config_path = _config_path
        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Insert YAML source before env vars.

        Priority (highest first): init > yaml > env > dotenv > file_secret
        """
        yaml_source = YamlConfigSource(settings_cls, config_path=cls._config_path)
        return (
            init_settings,
            yaml_source,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
