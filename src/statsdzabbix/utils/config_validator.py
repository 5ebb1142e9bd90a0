"""
Configuration loading and validation for the Zabbix backend.

This module provides validation for:
- Zabbix connection settings (host, port, sender executable)
- The allowed-items filter
- Flush interval and debug settings
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


# statsd configuration names mapped onto the snake_case names used internally
CONFIG_ALIASES = {
    "zabbixHost": "zabbix_host",
    "zabbixPort": "zabbix_port",
    "zabbixSender": "zabbix_sender",
    "zabbixAllowedItems": "allowed_items",
    "flushInterval": "flush_interval_ms",
}

KNOWN_FIELDS = {
    "zabbix_host",
    "zabbix_port",
    "zabbix_sender",
    "allowed_items",
    "flush_interval_ms",
    "debug",
}


def normalize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Translate statsd-style keys to snake_case, leaving unknown keys alone."""
    normalized = {}
    for key, value in config.items():
        normalized[CONFIG_ALIASES.get(key, key)] = value
    return normalized


class BackendConfigValidator:
    """Validates Zabbix backend configuration."""

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate a (normalized or statsd-style) backend configuration."""
        errors = []
        config = normalize_config(config)

        unknown = set(config.keys()) - KNOWN_FIELDS
        if unknown:
            # statsd shares one config file between all backends
            logger.debug(f"Ignoring configuration fields: {sorted(unknown)}")

        host = config.get("zabbix_host")
        if host is not None and not isinstance(host, str):
            errors.append(f"zabbix_host must be a string, got {type(host).__name__}")
        elif host is None:
            logger.warning("zabbix_host not set, delivery to Zabbix is disabled")

        port = config.get("zabbix_port", 10051)
        if isinstance(port, bool) or not isinstance(port, int):
            errors.append(f"zabbix_port must be an integer, got {port!r}")
        elif not 0 < port < 65536:
            errors.append(f"Invalid zabbix_port: {port} (should be 1-65535)")

        sender = config.get("zabbix_sender", "/usr/bin/zabbix_sender")
        if not isinstance(sender, str) or not sender:
            errors.append(f"zabbix_sender must be a non-empty path, got {sender!r}")

        interval = config.get("flush_interval_ms", 10000)
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            errors.append(f"flush_interval_ms must be a number, got {interval!r}")
        elif interval <= 0:
            errors.append(f"Invalid flush_interval_ms: {interval}")

        debug = config.get("debug", False)
        if not isinstance(debug, bool):
            errors.append(f"debug must be true or false, got {debug!r}")

        if "allowed_items" in config and config["allowed_items"] is not None:
            errors.extend(cls._validate_allowed_items(config["allowed_items"]))

        return errors

    @classmethod
    def _validate_allowed_items(cls, items: Any) -> List[str]:
        """Validate the allowed-items list without building it."""
        from ..routing.models import parse_allow_list_entry

        if not isinstance(items, list):
            return [f"allowed_items must be a list, got {type(items).__name__}"]

        errors = []
        for i, item in enumerate(items):
            try:
                parse_allow_list_entry(item)
            except ValueError as e:
                errors.append(f"allowed_items[{i}]: {e}")
            except re.error as e:
                errors.append(f"allowed_items[{i}]: invalid pattern {item!r} ({e})")
        return errors


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file based on its suffix."""
    config_file = Path(config_path)

    with open(config_file) as f:
        if config_file.suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f)
        else:
            config = json.load(f)

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    return config


def validate_and_load_config(config_path: str) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load and validate a configuration file.

    Returns:
        (is_valid, errors, config)
    """
    config = load_config_file(config_path)

    errors = BackendConfigValidator.validate(config)
    is_valid = len(errors) == 0

    if not is_valid:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")

    return is_valid, errors, config
