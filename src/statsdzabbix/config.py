"""Immutable backend configuration shared by router, formatter and delivery."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .routing.models import AllowList
from .utils.config_validator import BackendConfigValidator, ConfigurationError, normalize_config

logger = logging.getLogger(__name__)

DEFAULT_ZABBIX_PORT = 10051
DEFAULT_ZABBIX_SENDER = "/usr/bin/zabbix_sender"
DEFAULT_FLUSH_INTERVAL_MS = 10000


@dataclass(frozen=True)
class BackendConfig:
    """Settings consumed once at startup.

    A missing ``zabbix_host`` is a valid configuration: delivery is disabled
    and every flush becomes a no-op.
    """

    zabbix_host: Optional[str] = None
    zabbix_port: int = DEFAULT_ZABBIX_PORT
    zabbix_sender: str = DEFAULT_ZABBIX_SENDER
    allowed_items: Optional[AllowList] = None
    flush_interval_ms: float = DEFAULT_FLUSH_INTERVAL_MS
    debug: bool = False

    @property
    def delivery_enabled(self) -> bool:
        return bool(self.zabbix_host)

    @property
    def flush_interval_s(self) -> float:
        return self.flush_interval_ms / 1000

    def sender_command(self) -> List[str]:
        """Build the zabbix_sender command line (read items from stdin, with timestamps)."""
        return [
            self.zabbix_sender,
            "-T",
            "-i", "-",
            "-z", str(self.zabbix_host),
            "-p", str(self.zabbix_port),
        ]

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "BackendConfig":
        """Create a configuration from a statsd-style or snake_case mapping.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        errors = BackendConfigValidator.validate(config)
        if errors:
            raise ConfigurationError("; ".join(errors))

        config = normalize_config(config)
        allowed_items = AllowList.from_config(config.get("allowed_items"))
        if allowed_items is not None:
            logger.info(f"Zabbix allow-list configured with {len(allowed_items)} entries")

        return cls(
            zabbix_host=config.get("zabbix_host") or None,
            zabbix_port=config.get("zabbix_port", DEFAULT_ZABBIX_PORT),
            zabbix_sender=config.get("zabbix_sender", DEFAULT_ZABBIX_SENDER),
            allowed_items=allowed_items,
            flush_interval_ms=config.get("flush_interval_ms", DEFAULT_FLUSH_INTERVAL_MS),
            debug=config.get("debug", False),
        )
