"""Configuration precedence for the CLI.

Values come from, lowest to highest: built-in Constants, the configuration
file, then CLI flags.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from constants import Constants, load_yaml_config

logger = logging.getLogger(__name__)


def apply_config(cfg: Dict[str, Any]) -> None:
    """Copy recognized values from a validated configuration onto Constants."""
    parser_cfg = cfg.get("parser") or {}
    if "max_input_length" in parser_cfg:
        Constants.MAX_INPUT_LENGTH = int(parser_cfg["max_input_length"])

    control_cfg = cfg.get("control") or {}
    if "dependency_fields" in control_cfg:
        Constants.DEPENDENCY_FIELDS = list(control_cfg["dependency_fields"])

    http_cfg = cfg.get("http") or {}
    if "timeout" in http_cfg:
        Constants.REQUEST_TIMEOUT = http_cfg["timeout"]


def config_log_level(cfg: Dict[str, Any]):
    """Return the log level named in the configuration, if any."""
    return (cfg.get("logging") or {}).get("level")


def apply_cli_overrides(args) -> None:
    """Apply CLI flags on top of the configuration file."""
    if getattr(args, "MAX_LENGTH", None) is not None:
        Constants.MAX_INPUT_LENGTH = int(args.MAX_LENGTH)
    if getattr(args, "FIELDS", None):
        Constants.DEPENDENCY_FIELDS = list(args.FIELDS)
    if getattr(args, "TIMEOUT", None) is not None:
        Constants.REQUEST_TIMEOUT = float(args.TIMEOUT)


def load_and_apply(args) -> Dict[str, Any]:
    """Load the configuration file named by ``args`` (or the default) and apply it.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    cfg = load_yaml_config(getattr(args, "CONFIG", None))
    apply_config(cfg)
    apply_cli_overrides(args)
    logger.debug(
        "Effective settings: max_input_length=%s fields=%s timeout=%s",
        Constants.MAX_INPUT_LENGTH,
        Constants.DEPENDENCY_FIELDS,
        Constants.REQUEST_TIMEOUT,
    )
    return cfg
