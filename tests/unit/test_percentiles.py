"""
Unit tests for timer percentile statistics.
"""

import pytest
from statsdzabbix.metrics import ThresholdStatistics, aggregate
from statsdzabbix.metrics.percentiles import round_half_up


class TestAggregate:
    """Test the percentile aggregator."""

    def test_single_sample_degenerates(self):
        """Test that one sample yields that sample for every statistic."""
        stats = aggregate([42], [95])

        assert stats.count == 1
        assert stats.min == 42
        assert stats.max == 42
        assert stats.per_threshold[95] == ThresholdStatistics(mean=42, upper_bound=42)

    def test_percentile_window(self):
        """Test that the 90th percentile drops the highest sample out of ten."""
        stats = aggregate([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], [90])

        assert stats.per_threshold[90].upper_bound == 9
        assert stats.per_threshold[90].mean == pytest.approx(5.0)
        assert stats.min == 1
        assert stats.max == 10
        assert stats.count == 10

    def test_unsorted_samples(self):
        """Test that samples are sorted before windowing."""
        stats = aggregate([10, 3, 7, 1, 5], [80])

        # round(0.2 * 5) = 1 sample dropped
        assert stats.min == 1
        assert stats.max == 10
        assert stats.per_threshold[80].upper_bound == 7
        assert stats.per_threshold[80].mean == pytest.approx(4.0)

    def test_half_rounds_up(self):
        """Test that a .5 threshold index rounds up like Math.round."""
        # ((100 - 90) / 100) * 5 = 0.5 -> 1 sample dropped
        stats = aggregate([1, 2, 3, 4, 5], [90])
        assert stats.per_threshold[90].upper_bound == 4
        assert stats.per_threshold[90].mean == pytest.approx(2.5)

    def test_multiple_thresholds_keep_order(self):
        """Test that thresholds come back in configured order."""
        samples = list(range(1, 101))
        stats = aggregate(samples, [99, 50, 90])

        assert [pct for pct, _ in stats.threshold_items()] == [99, 50, 90]
        assert stats.per_threshold[50].upper_bound == 50
        assert stats.per_threshold[90].upper_bound == 90
        assert stats.per_threshold[99].upper_bound == 99

    def test_window_never_empty(self):
        """Test that a tiny threshold keeps at least the lowest sample."""
        stats = aggregate([5, 6], [1])
        assert stats.per_threshold[1].upper_bound == 5
        assert stats.per_threshold[1].mean == pytest.approx(5.0)

    def test_float_samples(self):
        """Test float samples and the overall mean."""
        stats = aggregate([0.5, 1.5, 2.5], [100])
        assert stats.per_threshold[100].upper_bound == 2.5
        assert stats.mean == pytest.approx(1.5)

    def test_empty_samples_rejected(self):
        """Test that an empty timer cannot be aggregated."""
        with pytest.raises(ValueError):
            aggregate([], [90])


class TestRoundHalfUp:
    """Test the rounding helper."""

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (1.49, 1), (0.0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
