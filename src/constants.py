"""Constants and configuration loading for debdep."""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    PARSE_ERROR = 3
    CONFIG_ERROR = 4
    UNSATISFIED = 5


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVEL_ENV_VAR = "DEBDEP_LOG_LEVEL"

    # Longest field body the CLI will hand to the parser.
    MAX_INPUT_LENGTH = 1024 * 1024

    DEPENDENCY_FIELDS = [
        "Depends",
        "Pre-Depends",
        "Recommends",
        "Suggests",
        "Enhances",
        "Breaks",
        "Conflicts",
        "Replaces",
        "Provides",
        "Built-Using",
    ]

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    CONFIG_ENV_VAR = "DEBDEP_CONFIG"
    DEFAULT_CONFIG_PATHS = [
        "debdep.yml",
        "debdep.yaml",
        os.path.join("~", ".config", "debdep", "debdep.yml"),
    ]


CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "logging": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
            },
        },
        "parser": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "max_input_length": {"type": "integer", "minimum": 1},
            },
        },
        "control": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "dependency_fields": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                },
            },
        },
        "http": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "timeout": {"type": "number", "exclusiveMinimum": 0},
            },
        },
    },
}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or fails validation."""


def validate_config(data: Any, source: str = "<config>") -> Dict[str, Any]:
    """Validate a loaded document against CONFIG_SCHEMA and return it.

    Raises:
        ConfigError: On the first schema violation, naming its location.
    """
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise ConfigError(f"Invalid configuration in {source} at '{path}': {first.message}")
    return data


def _find_default_config() -> Optional[str]:
    env_path = os.environ.get(Constants.CONFIG_ENV_VAR)
    if env_path:
        return env_path
    for candidate in Constants.DEFAULT_CONFIG_PATHS:
        path = os.path.expanduser(candidate)
        if os.path.isfile(path):
            return path
    return None


def load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the configuration file.

    Looks at ``path``, then the DEBDEP_CONFIG environment variable, then the
    default locations. ``.json`` files are read as JSON, everything else as
    YAML.

    Returns:
        dict: The validated document, or an empty dict when no file exists.

    Raises:
        ConfigError: If the file is unreadable, malformed or invalid.
    """
    config_path = path or _find_default_config()
    if not config_path:
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

    if data is None:
        data = {}
    logger.debug("Loaded configuration from %s", config_path)
    return validate_config(data, config_path)
