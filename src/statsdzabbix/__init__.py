"""statsdzabbix - flush statsd metrics to Zabbix via zabbix_sender."""

__version__ = "0.1.0"

from .config import BackendConfig
from .metrics import MetricsSnapshot
from .orchestration import ZabbixBackend

__all__ = ["BackendConfig", "MetricsSnapshot", "ZabbixBackend", "__version__"]
