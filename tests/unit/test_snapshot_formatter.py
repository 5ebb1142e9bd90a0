"""
Unit tests for zabbix_sender text formatting.
"""

import pytest
from statsdzabbix.formatting import SnapshotFormatter, format_value, threshold_label
from statsdzabbix.metrics import MetricsSnapshot
from statsdzabbix.routing import AllowList, KeyRouter

TS = 1700000000


def make_formatter(allowed_items=None, flush_interval_ms=60000):
    return SnapshotFormatter(KeyRouter(AllowList.from_config(allowed_items)), flush_interval_ms)


class TestSnapshotFormatter:
    """Test snapshot formatting."""

    def test_counter_and_gauge(self):
        """Test one counter and one gauge produce three lines and two stats."""
        snapshot = MetricsSnapshot(
            counters={"web01.requests": 120},
            gauges={"web01.queue_depth": 7},
        )

        text, num_stats = make_formatter().format(TS, snapshot)

        assert text.splitlines() == [
            f"web01 requests[total] {TS} 120",
            f"web01 requests[avg] {TS} 2",
            f"web01 queue_depth {TS} 7",
        ]
        assert text.endswith("\n")
        assert num_stats == 2

    def test_counter_rate_uses_flush_interval(self):
        """Test that the per-second rate divides by the interval in seconds."""
        snapshot = MetricsSnapshot(counters={"web01.hits": 15})
        text, _ = make_formatter(flush_interval_ms=10000).format(TS, snapshot)
        assert f"web01 hits[avg] {TS} 1.5\n" in text

    def test_timer_lines(self):
        """Test per-threshold and overall timer lines."""
        snapshot = MetricsSnapshot(
            timers={"api.latency": [10, 1, 2, 3, 4, 5, 6, 7, 8, 9]},
            percentile_thresholds=(90,),
        )

        text, num_stats = make_formatter().format(TS, snapshot)

        assert text.splitlines() == [
            f"api latency[mean][90] {TS} 5",
            f"api latency[upper][90] {TS} 9",
            f"api latency[upper] {TS} 10",
            f"api latency[lower] {TS} 1",
            f"api latency[count] {TS} 10",
        ]
        assert num_stats == 1

    def test_timer_multiple_thresholds(self):
        """Test that each threshold gets its own labelled lines."""
        snapshot = MetricsSnapshot(
            timers={"api.latency": [1, 2, 3, 4]},
            percentile_thresholds=(90, 99.9),
        )

        lines = make_formatter().format(TS, snapshot)[0].splitlines()

        assert len(lines) == 2 * 2 + 3
        assert any(line.startswith("api latency[mean][90] ") for line in lines)
        assert any(line.startswith("api latency[upper][99_9] ") for line in lines)

    def test_empty_timer_skipped(self):
        """Test that a timer without samples produces no output."""
        snapshot = MetricsSnapshot(timers={"api.latency": []}, percentile_thresholds=(90,))
        assert make_formatter().format(TS, snapshot) == ("", 0)

    def test_unrouted_keys_excluded(self):
        """Test that filtered keys add neither lines nor stats."""
        snapshot = MetricsSnapshot(
            counters={"other.metric": 5, "statsd.numStats": 3},
            gauges={"other.gauge": 1},
            timers={"other.timer": [1, 2]},
            percentile_thresholds=(90,),
        )

        text, num_stats = make_formatter(allowed_items=["/^statsd/"]).format(TS, snapshot)

        assert num_stats == 1
        assert "other" not in text
        assert len(text.splitlines()) == 2

    def test_logstash_keys(self):
        """Test that logstash keys are rewritten in the output."""
        snapshot = MetricsSnapshot(gauges={"logstash.my_host.cpu_load": 0.75})
        text, _ = make_formatter().format(TS, snapshot)
        assert text == f"my.host cpu.load {TS} 0.75\n"

    def test_empty_snapshot(self):
        """Test that an empty snapshot formats to nothing."""
        assert make_formatter().format(TS, MetricsSnapshot()) == ("", 0)


class TestValueRendering:
    """Test number and label rendering."""

    @pytest.mark.parametrize("value,expected", [
        (2, "2"),
        (2.0, "2"),
        (1.5, "1.5"),
        (0.1, "0.1"),
        (-3, "-3"),
        (True, "1"),
    ])
    def test_format_value(self, value, expected):
        assert format_value(value) == expected

    @pytest.mark.parametrize("pct,expected", [(90, "90"), (90.0, "90"), (99.9, "99_9"), (99.99, "99_99")])
    def test_threshold_label(self, pct, expected):
        assert threshold_label(pct) == expected


class TestMetricsSnapshot:
    """Test building snapshots from statsd metrics."""

    def test_from_statsd(self):
        """Test the statsd metrics mapping with pctThreshold."""
        snapshot = MetricsSnapshot.from_statsd({
            "counters": {"a.b": 1},
            "gauges": {"c.d": 2},
            "timers": {"e.f": [3, 4]},
            "pctThreshold": [90, 95],
        })

        assert snapshot.counters == {"a.b": 1}
        assert snapshot.gauges == {"c.d": 2}
        assert snapshot.timers == {"e.f": [3, 4]}
        assert snapshot.percentile_thresholds == (90, 95)

    def test_scalar_threshold(self):
        """Test that a single configured threshold is accepted."""
        snapshot = MetricsSnapshot.from_statsd({"pctThreshold": 90})
        assert snapshot.percentile_thresholds == (90,)

    def test_missing_sections(self):
        """Test that missing sections default to empty."""
        snapshot = MetricsSnapshot.from_statsd({})
        assert snapshot.counters == {}
        assert snapshot.timers == {}
        assert snapshot.percentile_thresholds == ()
