"""Metrics package exposing OS health metrics and the registry they report through."""

from .cpu import CpuUsageSampler, compute_usage_percent, sample_aggregate_cpu
from .exceptions import (
    MetricAlreadyRegisteredError,
    MetricsError,
    PlatformStatsError,
    SamplingCancelledError,
)
from .gauges import CachedGauge, Gauge
from .os_metrics import NODE_OS_METRICS, create_os_metrics
from .platform_stats import PlatformStats, PsutilPlatformStats
from .registry import MetricsRegistry
from .reporters import LoggingReporter
from .samples import AggregateCpuSample, CpuCoreSample

__all__ = [
    "AggregateCpuSample",
    "CachedGauge",
    "CpuCoreSample",
    "CpuUsageSampler",
    "Gauge",
    "LoggingReporter",
    "MetricAlreadyRegisteredError",
    "MetricsError",
    "MetricsRegistry",
    "NODE_OS_METRICS",
    "PlatformStats",
    "PlatformStatsError",
    "PsutilPlatformStats",
    "SamplingCancelledError",
    "compute_usage_percent",
    "create_os_metrics",
    "sample_aggregate_cpu",
]
