"""Data models for flushed metrics and derived timer statistics."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class MetricsSnapshot:
    """Aggregated metrics handed over by statsd for one flush cycle."""

    counters: Mapping[str, Number] = field(default_factory=dict)
    gauges: Mapping[str, Number] = field(default_factory=dict)
    timers: Mapping[str, Sequence[Number]] = field(default_factory=dict)
    percentile_thresholds: Tuple[Number, ...] = ()

    @classmethod
    def from_statsd(cls, metrics: Mapping[str, Any]) -> "MetricsSnapshot":
        """Build a snapshot from the metrics mapping statsd passes to backends.

        Both the statsd names (``pctThreshold``) and snake_case names
        (``percentile_thresholds``) are accepted. A single threshold given as a
        bare number is treated as a one-element list.
        """
        thresholds = metrics.get("pctThreshold", metrics.get("percentile_thresholds", ()))
        if isinstance(thresholds, (int, float)):
            thresholds = (thresholds,)
        elif isinstance(thresholds, Mapping):
            thresholds = tuple(thresholds.values())

        return cls(
            counters=dict(metrics.get("counters") or {}),
            gauges=dict(metrics.get("gauges") or {}),
            timers={key: list(values) for key, values in (metrics.get("timers") or {}).items()},
            percentile_thresholds=tuple(thresholds),
        )


@dataclass(frozen=True)
class ThresholdStatistics:
    """Mean and upper bound over the samples kept at one percentile threshold."""

    mean: Number
    upper_bound: Number


@dataclass(frozen=True)
class TimerStatistics:
    """Statistics derived from one timer's samples in a flush cycle."""

    min: Number
    max: Number
    mean: Number
    count: int
    per_threshold: Dict[Number, ThresholdStatistics] = field(default_factory=dict)

    def threshold_items(self) -> List[Tuple[Number, ThresholdStatistics]]:
        """Threshold statistics in configured order."""
        return list(self.per_threshold.items())
