"""Timing and memory profiling for whole-document operations."""

import time
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import psutil


@dataclass
class OperationMetrics:
    """Metrics for one profiled operation."""
    operation_name: str
    duration: float
    record_count: int
    memory_start_mb: float
    memory_end_mb: float
    records_per_second: float


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


class OperationProfiler:
    """
    Records duration, resident memory and record throughput of operations.

    The state of an in-flight operation lives in the context manager frame,
    so one profiler can be shared by concurrent callers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the operation profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[OperationMetrics] = []

    @contextmanager
    def profile_operation(self, operation_name: str, record_count: int = 0):
        """
        Context manager for profiling an operation.

        Args:
            operation_name: Name of the operation being profiled
            record_count: Number of records the operation handles
        """
        start_time = time.perf_counter()
        start_memory = _rss_mb()
        self.logger.debug(f"Started profiling: {operation_name}")

        try:
            yield self
        finally:
            duration = time.perf_counter() - start_time
            metrics = OperationMetrics(
                operation_name=operation_name,
                duration=duration,
                record_count=record_count,
                memory_start_mb=start_memory,
                memory_end_mb=_rss_mb(),
                records_per_second=record_count / duration if duration > 0 else 0.0
            )
            self.metrics_history.append(metrics)
            self.logger.info(
                f"{operation_name}: {duration * 1000:.2f}ms, {record_count} records, "
                f"{metrics.records_per_second:.0f} records/s, "
                f"memory {metrics.memory_start_mb:.1f}->{metrics.memory_end_mb:.1f} MB"
            )

    def summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded operations.

        Returns:
            Dictionary with totals and per-operation figures
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        total_records = sum(m.record_count for m in self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_records": total_records,
            "peak_memory_mb": max(m.memory_end_mb for m in self.metrics_history),
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "records": m.record_count
                }
                for m in self.metrics_history
            ]
        }
