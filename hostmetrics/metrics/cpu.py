"""Aggregate CPU utilization from two tick samples bracketing an interval."""

from __future__ import annotations

import threading
from typing import Optional

from .exceptions import SamplingCancelledError
from .platform_stats import PlatformStats, default_platform_stats
from .samples import AggregateCpuSample


def sample_aggregate_cpu(stats: Optional[PlatformStats] = None) -> AggregateCpuSample:
    """Read per-core tick counters and sum them into a single sample."""
    stats = stats or default_platform_stats
    return AggregateCpuSample.from_cores(stats.cpu_core_samples())


def compute_usage_percent(start: AggregateCpuSample, end: AggregateCpuSample) -> float:
    """Return the percentage of non-idle ticks between two samples.

    A non-positive total delta (no time elapsed, counter reset) yields 0.0.
    The result is clamped to [0, 100].
    """
    idle_delta = end.idle_ticks - start.idle_ticks
    total_delta = end.total_ticks - start.total_ticks
    if total_delta <= 0:
        return 0.0

    usage = 100.0 * (1.0 - idle_delta / total_delta)
    return min(max(usage, 0.0), 100.0)


class CpuUsageSampler:
    """Value function for the CPU usage cached gauge.

    Each call takes a sample, waits ``sample_time_in_seconds`` on the stop
    event, takes a second sample and returns the usage between them.
    """

    def __init__(
        self,
        sample_time_in_seconds: float,
        stop_event: threading.Event,
        stats: Optional[PlatformStats] = None,
    ):
        self.sample_time_in_seconds = sample_time_in_seconds
        self._stop_event = stop_event
        self._stats = stats or default_platform_stats

    def __call__(self) -> float:
        start = sample_aggregate_cpu(self._stats)
        if self._stop_event.wait(self.sample_time_in_seconds):
            raise SamplingCancelledError("CPU sampling cancelled during shutdown")
        end = sample_aggregate_cpu(self._stats)
        return compute_usage_percent(start, end)
