"""Tests for operation profiler."""

import logging
import pytest
from agmip_reshaper.profiler import OperationProfiler


class TestOperationProfiler:
    """Tests for OperationProfiler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.profiler = OperationProfiler()

    def test_empty_summary(self):
        """Test the summary with no operations."""
        assert self.profiler.summary() == {"total_operations": 0}

    def test_profile_operation(self, caplog):
        """Test that a profiled operation is recorded and logged."""
        with caplog.at_level(logging.INFO):
            with self.profiler.profile_operation("decompress_all", record_count=365):
                sum(range(1000))

        metrics = self.profiler.metrics_history[0]
        assert metrics.operation_name == "decompress_all"
        assert metrics.record_count == 365
        assert metrics.duration >= 0
        assert metrics.memory_start_mb > 0
        assert "decompress_all" in caplog.text

    def test_recorded_on_error(self):
        """Test that a failing operation is still recorded."""
        with pytest.raises(RuntimeError):
            with self.profiler.profile_operation("flatten_globals"):
                raise RuntimeError("boom")

        assert len(self.profiler.metrics_history) == 1

    def test_summary(self):
        """Test aggregation over several operations."""
        with self.profiler.profile_operation("a", record_count=10):
            pass
        with self.profiler.profile_operation("b", record_count=5):
            pass

        summary = self.profiler.summary()

        assert summary["total_operations"] == 2
        assert summary["total_records"] == 15
        assert [op["name"] for op in summary["operations"]] == ["a", "b"]
        assert summary["peak_memory_mb"] > 0
