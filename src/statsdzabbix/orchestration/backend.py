"""statsd backend entry point wiring routing, formatting and delivery together."""

import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional, Union

import yaml

from ..config import BackendConfig
from ..delivery import DeliveryInvoker, DeliveryStatus, Sender
from ..formatting import SnapshotFormatter
from ..metrics import MetricsSnapshot
from ..routing import KeyRouter

logger = logging.getLogger(__name__)

BACKEND_NAME = "zabbix"

StatusWriter = Callable[[Optional[Exception], str, str, Any], Any]


class ZabbixBackend:
    """Flushes statsd metrics to Zabbix.

    The host daemon calls ``flush`` once per flush interval and ``status``
    on demand. ``flush`` returns as soon as the payload has been handed to a
    detached zabbix_sender process.
    """

    def __init__(
        self,
        config: BackendConfig,
        startup_time: Optional[int] = None,
        sender: Optional[Sender] = None,
    ):
        """Initialize the backend.

        Args:
            config: Backend configuration
            startup_time: Unix time the daemon started; defaults to now
            sender: Optional replacement for the zabbix_sender process
        """
        self.config = config
        if startup_time is None:
            startup_time = int(time.time())

        self.status_record = DeliveryStatus(last_flush=startup_time, last_exception=startup_time)
        self.router = KeyRouter(config.allowed_items)
        self.formatter = SnapshotFormatter(self.router, config.flush_interval_ms)
        self.invoker = DeliveryInvoker(config, self.status_record, sender=sender)

        if config.debug:
            logging.getLogger("statsdzabbix").setLevel(logging.DEBUG)

        if config.delivery_enabled:
            logger.info(
                f"Zabbix backend initialized: {config.zabbix_host}:{config.zabbix_port} "
                f"via {config.zabbix_sender}"
            )
        else:
            logger.info("Zabbix backend initialized without zabbix_host, delivery disabled")

    def flush(self, ts: int, metrics: Union[MetricsSnapshot, Mapping[str, Any]]) -> int:
        """Format and deliver one flush cycle.

        Args:
            ts: Unix timestamp of the flush
            metrics: MetricsSnapshot or the raw statsd metrics mapping

        Returns:
            Number of metric keys sent (0 when delivery is disabled)
        """
        self.status_record.last_flush = int(ts)

        if not self.invoker.enabled:
            return 0

        if not isinstance(metrics, MetricsSnapshot):
            metrics = MetricsSnapshot.from_statsd(metrics)

        text, num_stats = self.formatter.format(int(ts), metrics)
        logger.debug(f"Flushing {num_stats} stats to Zabbix at {ts}")

        self.invoker.deliver(text)
        return num_stats

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight deliveries before a short-lived process exits."""
        self.invoker.join(timeout)

    def status(self, write_cb: StatusWriter) -> None:
        """Report backend status fields through the statsd status callback."""
        for stat, value in self.status_record.as_dict().items():
            write_cb(None, BACKEND_NAME, stat, value)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any], **kwargs) -> "ZabbixBackend":
        return cls(BackendConfig.from_dict(config_data), **kwargs)

    @classmethod
    def from_yaml_file(cls, config_path: str, **kwargs) -> "ZabbixBackend":
        """Create a backend from a YAML configuration file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ZabbixBackend instance
        """
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)

        return cls.from_dict(config_data or {}, **kwargs)

    @classmethod
    def from_json_file(cls, config_path: str, **kwargs) -> "ZabbixBackend":
        """Create a backend from a JSON configuration file.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            ZabbixBackend instance
        """
        with open(config_path, "r") as f:
            config_data = json.load(f)

        return cls.from_dict(config_data, **kwargs)
