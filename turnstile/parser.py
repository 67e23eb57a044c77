"""
Machine configuration parser.

Loads and validates machine configurations from YAML or JSON files.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Union

import yaml
from pydantic import ValidationError

from turnstile.exceptions import ConfigError
from turnstile.schema import MachineConfig

logger = logging.getLogger(__name__)


class MachineParser:
    """
    Parse and validate machine configurations.

    Supports:
    - YAML files (.yaml, .yml)
    - JSON files (.json)
    - Direct string and dict parsing

    Example:
        ```python
        # From file
        config = MachineParser.parse_file("coin_gate.yaml")

        # From string
        yaml_content = '''
        initial: locked
        states:
          locked:
            transitions: {coin: unlocked}
          unlocked:
            transitions: {push: locked}
        '''
        config = MachineParser.parse_string(yaml_content)
        ```

    Note that YAML 1.1 reads unquoted ``on``/``off``/``yes``/``no`` as
    booleans, so such state names must be quoted.
    """

    @staticmethod
    def parse_file(path: Union[str, Path]) -> MachineConfig:
        """
        Parse machine configuration from file.

        Args:
            path: Path to configuration file (YAML or JSON)

        Returns:
            Validated MachineConfig

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigError: If file format is unsupported or content is invalid
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Machine file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            config = MachineParser.parse_string(content, format="yaml")
        elif path.suffix == ".json":
            config = MachineParser.parse_string(content, format="json")
        else:
            raise ConfigError(f"Unsupported file format: {path.suffix}")

        logger.debug(f"Loaded machine configuration from {path}")
        return config

    @staticmethod
    def parse_string(content: str, format: str = "yaml") -> MachineConfig:
        """
        Parse machine configuration from string content.

        Args:
            content: YAML or JSON string
            format: "yaml" or "json"

        Returns:
            Validated MachineConfig

        Raises:
            ConfigError: If format is unsupported or the document is empty/invalid
        """
        if format == "yaml":
            data = yaml.safe_load(content)
        elif format == "json":
            import json

            data = json.loads(content)
        else:
            raise ConfigError(f"Unsupported format: {format}")

        if data is None:
            raise ConfigError("Empty machine definition")

        return MachineParser.parse_dict(data)

    @staticmethod
    def parse_dict(data: Mapping[str, Any]) -> MachineConfig:
        """
        Parse machine configuration from a dictionary.

        Raises:
            ConfigError: If data is missing or does not match the schema
        """
        if data is None:
            raise ConfigError("Config is not defined")
        try:
            return MachineConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid machine definition: {e}") from e

    @staticmethod
    def validate_file(path: Union[str, Path]) -> tuple[bool, str]:
        """
        Validate a machine file.

        Returns:
            Tuple of (is_valid, message)
        """
        try:
            config = MachineParser.parse_file(path)
            label = config.name or Path(path).stem
            return True, f"Valid machine: {label} ({len(config.states)} states)"
        except FileNotFoundError as e:
            return False, f"File not found: {e}"
        except OSError as e:
            return False, f"Cannot read file: {e}"
        except ConfigError as e:
            return False, f"Invalid definition: {e}"
        except (yaml.YAMLError, ValueError) as e:
            return False, f"Invalid format: {e}"
