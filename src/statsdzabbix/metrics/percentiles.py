"""Percentile statistics over timer samples."""

import math
from typing import Iterable, Sequence

import numpy as np

from .models import Number, ThresholdStatistics, TimerStatistics


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``Math.round`` semantics)."""
    return int(math.floor(value + 0.5))


def aggregate(samples: Sequence[Number], thresholds: Iterable[Number]) -> TimerStatistics:
    """Compute min/max/count and per-threshold statistics for a timer.

    For each percentile threshold ``pct`` the samples are sorted ascending and
    the highest ``100 - pct`` percent are cut off; the mean and upper bound are
    then taken over the remaining, lowest-valued samples. With a single sample
    every threshold degenerates to that sample.

    Args:
        samples: Timer samples observed during the flush interval
        thresholds: Percentile thresholds, e.g. (90, 95, 99)

    Returns:
        TimerStatistics for the timer

    Raises:
        ValueError: If samples is empty
    """
    if len(samples) == 0:
        raise ValueError("Cannot aggregate a timer without samples")

    sorted_array = np.sort(np.asarray(samples))
    values = sorted_array.tolist()
    count = len(values)
    min_value = values[0]
    max_value = values[-1]

    per_threshold = {}
    for pct in thresholds:
        if count == 1:
            per_threshold[pct] = ThresholdStatistics(mean=min_value, upper_bound=max_value)
            continue

        threshold_index = round_half_up(((100 - pct) / 100) * count)
        # Window always holds between one and all samples
        num_in_threshold = min(max(count - threshold_index, 1), count)

        per_threshold[pct] = ThresholdStatistics(
            mean=float(np.mean(sorted_array[:num_in_threshold])),
            upper_bound=values[num_in_threshold - 1],
        )

    return TimerStatistics(
        min=min_value,
        max=max_value,
        mean=float(np.mean(sorted_array)),
        count=count,
        per_threshold=per_threshold,
    )
