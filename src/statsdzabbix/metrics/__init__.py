"""Metrics snapshot models and timer statistics."""

from .models import MetricsSnapshot, ThresholdStatistics, TimerStatistics
from .percentiles import aggregate

__all__ = ["MetricsSnapshot", "ThresholdStatistics", "TimerStatistics", "aggregate"]
