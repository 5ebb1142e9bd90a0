"""Serialization of a metrics snapshot into zabbix_sender input lines."""

import logging
from typing import List, Tuple

from ..metrics import MetricsSnapshot, aggregate
from ..metrics.models import Number
from ..routing import KeyRouter, RoutedKey

logger = logging.getLogger(__name__)


def format_value(value: Number) -> str:
    """Render a metric value, dropping the fraction of integral floats (2.0 -> 2)."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def threshold_label(pct: Number) -> str:
    """Render a percentile threshold as an item-key parameter (99.9 -> 99_9)."""
    return format(pct, "g").replace(".", "_")


def format_line(routed: RoutedKey, suffix: str, ts: int, value: Number) -> str:
    return f"{routed.host} {routed.item_key}{suffix} {ts} {format_value(value)}\n"


class SnapshotFormatter:
    """Turns a flushed snapshot into zabbix_sender text, one item per line."""

    def __init__(self, router: KeyRouter, flush_interval_ms: float):
        """Initialize the formatter.

        Args:
            router: Key router used to map and filter metric keys
            flush_interval_ms: Flush interval, used to derive per-second counter rates
        """
        self.router = router
        self.flush_interval_ms = flush_interval_ms

    def format(self, ts: int, snapshot: MetricsSnapshot) -> Tuple[str, int]:
        """Format all counters, timers and gauges of a snapshot.

        Args:
            ts: Unix timestamp of the flush
            snapshot: Metrics snapshot to format

        Returns:
            (text, num_stats) where num_stats counts metric keys that produced output
        """
        lines: List[str] = []
        num_stats = 0

        for key, value in snapshot.counters.items():
            routed = self.router.route(key)
            if routed is None:
                continue
            lines.extend(self.format_counter(routed, ts, value))
            num_stats += 1

        for key, samples in snapshot.timers.items():
            if len(samples) == 0:
                continue
            routed = self.router.route(key)
            if routed is None:
                continue
            lines.extend(self.format_timer(routed, ts, samples, snapshot.percentile_thresholds))
            num_stats += 1

        for key, value in snapshot.gauges.items():
            routed = self.router.route(key)
            if routed is None:
                continue
            lines.append(format_line(routed, "", ts, value))
            num_stats += 1

        logger.debug(f"Formatted {num_stats} stats into {len(lines)} lines")
        return "".join(lines), num_stats

    def format_counter(self, routed: RoutedKey, ts: int, value: Number) -> List[str]:
        value_per_second = value / (self.flush_interval_ms / 1000)
        return [
            format_line(routed, "[total]", ts, value),
            format_line(routed, "[avg]", ts, value_per_second),
        ]

    def format_timer(self, routed: RoutedKey, ts: int, samples, thresholds) -> List[str]:
        stats = aggregate(samples, thresholds)

        lines = []
        for pct, threshold_stats in stats.threshold_items():
            label = threshold_label(pct)
            lines.append(format_line(routed, f"[mean][{label}]", ts, threshold_stats.mean))
            lines.append(format_line(routed, f"[upper][{label}]", ts, threshold_stats.upper_bound))

        lines.append(format_line(routed, "[upper]", ts, stats.max))
        lines.append(format_line(routed, "[lower]", ts, stats.min))
        lines.append(format_line(routed, "[count]", ts, stats.count))
        return lines
