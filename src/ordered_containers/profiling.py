"""Performance profiling utilities for container operations."""

import time
import functools
import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


@dataclass
class OperationMetrics:
    """Timing statistics for a single tracked operation."""
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float('inf')
    max_time: float = 0.0
    times: List[float] = field(default_factory=list)

    def add_measurement(self, elapsed: float) -> None:
        self.call_count += 1
        self.total_time += elapsed
        self.min_time = min(self.min_time, elapsed)
        self.max_time = max(self.max_time, elapsed)
        self.times.append(elapsed)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count > 0 else 0.0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0.0

    def __str__(self) -> str:
        return (f"Calls: {self.call_count}, "
                f"Total: {self.total_time:.6f}s, "
                f"Avg: {self.avg_time:.6f}s, "
                f"Median: {self.median_time:.6f}s")


class PerformanceTracker:
    """
    Process-wide collector of operation timings.

    Tracking is off until `enable()` is called, so decorated container
    operations only pay for a flag check by default.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, OperationMetrics] = defaultdict(OperationMetrics)
        self.enabled = False

    def add_measurement(self, operation: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[operation].add_measurement(elapsed)

    def reset(self) -> None:
        self.metrics.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """
        Render the collected metrics as a fixed-width table.

        Parameters:
            sort_by (str): An OperationMetrics attribute to sort by, descending.

        Returns:
            str: The table, or a notice if nothing was collected.
        """
        if not self.metrics:
            return "No performance data collected."

        lines = ["Performance Metrics:", "-" * 80]
        lines.append(f"{'Operation':<40} {'Calls':>8} {'Total (s)':>12} {'Avg (s)':>12} {'Median (s)':>12}")
        lines.append("-" * 80)

        ranked = sorted(
            self.metrics.items(),
            key=lambda kv: getattr(kv[1], sort_by),
            reverse=True
        )
        for operation, m in ranked:
            lines.append(f"{operation:<40} {m.call_count:>8} {m.total_time:>12.6f} "
                         f"{m.avg_time:>12.6f} {m.median_time:>12.6f}")
        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator recording the wall time of each call in the PerformanceTracker.

    Usable bare (`@track_performance`) or with a custom tag
    (`@track_performance(tag="trie.insert")`).
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.add_measurement(name, time.perf_counter() - start)
        return wrapper

    if method is None:
        return decorator
    return decorator(method)
