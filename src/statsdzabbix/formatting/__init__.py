"""zabbix_sender text formatting module."""

from .snapshot_formatter import SnapshotFormatter, format_value, threshold_label

__all__ = ["SnapshotFormatter", "format_value", "threshold_label"]
