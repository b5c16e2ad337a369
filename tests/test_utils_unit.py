"""
Unit tests for configuration, request ids and metrics.
"""

import pytest

from swatch.config import Config
from swatch.utils.ids import generate_request_id
from swatch.utils.metrics import MetricsCollector, performance_monitor, get_metrics


class TestConfig:
    """Config validators"""

    def test_validate_max_depth(self):
        assert Config.validate_max_depth(0)
        assert Config.validate_max_depth(Config.MAX_DEPTH_LIMIT)
        assert not Config.validate_max_depth(-1)
        assert not Config.validate_max_depth(Config.MAX_DEPTH_LIMIT + 1)

    def test_validate_output(self):
        assert Config.validate_output("HTML")
        assert Config.validate_output("file")
        assert not Config.validate_output("xml")

    def test_validate_max_edge(self):
        assert Config.validate_max_edge(0)
        assert Config.validate_max_edge(512)
        assert not Config.validate_max_edge(8)


class TestRequestIds:
    """Request id format"""

    def test_prefix_and_timestamp(self):
        request_id = generate_request_id()
        assert request_id.startswith("swatch-")
        timestamp = request_id.split("-")[1]
        assert len(timestamp) == 14 and timestamp.isdigit()

    def test_custom_prefix(self):
        assert generate_request_id("cli").startswith("cli-")

    def test_unique(self):
        assert generate_request_id() != generate_request_id()


class TestMetricsCollector:
    """In-process metrics"""

    def test_counters(self):
        metrics = MetricsCollector()
        metrics.increment_request_count()
        metrics.increment_output_count("json")
        metrics.increment_failure_count("ValueError")
        assert metrics.get_counters() == {
            "swatch_requests_total": 1,
            "swatch_output_total_json": 1,
            "swatch_failed_total_ValueError": 1,
        }

    def test_timing_stats(self):
        metrics = MetricsCollector()
        for value in (10.0, 20.0, 30.0):
            metrics.record_timing("quantization", value)
        stats = metrics.get_timing_stats()["quantization_duration_ms"]
        assert stats["count"] == 3
        assert stats["mean"] == pytest.approx(20.0)
        assert stats["p50"] == pytest.approx(20.0)

    def test_reset(self):
        metrics = MetricsCollector()
        metrics.record_palette_size(16)
        metrics.reset()
        assert metrics.get_palette_size_stats() == {}

    def test_performance_monitor_records_failures(self):
        with pytest.raises(RuntimeError):
            with performance_monitor("broken"):
                raise RuntimeError("boom")
        assert "broken_duration_ms" in get_metrics().get_timing_stats()
