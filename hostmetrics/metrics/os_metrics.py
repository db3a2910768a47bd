"""Operating system health metrics and their registration.

``NODE_OS_METRICS`` maps each metric name to the factory that builds it.
``create_os_metrics`` builds one instance of every metric and registers them
all with a registry, sharing dimensions and reporting interval.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .cpu import CpuUsageSampler
from .gauges import CachedGauge, Gauge
from .platform_stats import PlatformStats, default_platform_stats

logger = logging.getLogger(__name__)

DEFAULT_NODE_OS_METRICS_REPORTING_INTERVAL_IN_SECONDS = 30
DEFAULT_CPU_UPDATE_INTERVAL_IN_SECONDS = 30
DEFAULT_CPU_SAMPLE_TIME_IN_SECONDS = 5


def _positive_or_default(value: Optional[float], default: float) -> float:
    # NaN fails every comparison
    if value is None or not value > 0:
        return default
    return value


def create_loadavg_1m_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    stats = stats or default_platform_stats
    return Gauge(lambda: stats.load_average()[0])


def create_loadavg_5m_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    stats = stats or default_platform_stats
    return Gauge(lambda: stats.load_average()[1])


def create_loadavg_15m_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    stats = stats or default_platform_stats
    return Gauge(lambda: stats.load_average()[2])


def create_freemem_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    """Free physical memory in bytes."""
    stats = stats or default_platform_stats
    return Gauge(stats.free_memory)


def create_totalmem_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    """Total physical memory in bytes."""
    stats = stats or default_platform_stats
    return Gauge(stats.total_memory)


def create_uptime_gauge(*, stats: Optional[PlatformStats] = None) -> Gauge:
    """How long the OS has been running, in seconds."""
    stats = stats or default_platform_stats
    return Gauge(stats.uptime)


def create_cpu_all_cores_avg_gauge(
    update_interval_in_seconds: Optional[float] = None,
    sample_time_in_seconds: Optional[float] = None,
    *,
    stats: Optional[PlatformStats] = None,
) -> CachedGauge:
    """
    Create a cached gauge tracking CPU usage across all cores.

    Args:
        update_interval_in_seconds: How often to refresh the cached average.
            Defaults to 30 when missing or not positive.
        sample_time_in_seconds: How long each refresh samples CPU ticks for.
            Defaults to 5 when missing or not positive.
        stats: Platform stats provider, psutil when omitted.

    Returns:
        CachedGauge whose value is the usage percent in [0, 100].
    """
    update_interval = _positive_or_default(
        update_interval_in_seconds, DEFAULT_CPU_UPDATE_INTERVAL_IN_SECONDS
    )
    sample_time = _positive_or_default(
        sample_time_in_seconds, DEFAULT_CPU_SAMPLE_TIME_IN_SECONDS
    )

    stop_event = threading.Event()
    sampler = CpuUsageSampler(sample_time, stop_event, stats=stats)
    return CachedGauge(sampler, update_interval, stop_event=stop_event)


NODE_OS_METRICS: Mapping[str, Callable[..., object]] = MappingProxyType({
    "node.os.loadavg.1m": create_loadavg_1m_gauge,
    "node.os.loadavg.5m": create_loadavg_5m_gauge,
    "node.os.loadavg.15m": create_loadavg_15m_gauge,
    "node.os.freemem": create_freemem_gauge,
    "node.os.totalmem": create_totalmem_gauge,
    "node.os.uptime": create_uptime_gauge,
    "node.os.cpu.all-cores-avg": create_cpu_all_cores_avg_gauge,
})


def create_os_metrics(
    metrics_registry,
    custom_dimensions: Optional[Dict[str, str]] = None,
    reporting_interval_in_seconds: Optional[float] = None,
    stats: Optional[PlatformStats] = None,
) -> None:
    """
    Register one instance of every OS metric with ``metrics_registry``.

    Args:
        metrics_registry: Object exposing
            ``register(name, metric, dimensions, interval_seconds)``.
        custom_dimensions: Tags shared by every registered metric.
        reporting_interval_in_seconds: Reporting interval for every metric,
            30 when missing or falsy.
        stats: Platform stats provider handed to every factory.

    Raises:
        Whatever ``register`` raises; registration stops at that metric.
    """
    if custom_dimensions is None:
        custom_dimensions = {}
    reporting_interval_in_seconds = (
        reporting_interval_in_seconds
        or DEFAULT_NODE_OS_METRICS_REPORTING_INTERVAL_IN_SECONDS
    )

    for metric_name, factory in NODE_OS_METRICS.items():
        metric = factory(stats=stats)
        try:
            metrics_registry.register(
                metric_name,
                metric,
                custom_dimensions,
                reporting_interval_in_seconds,
            )
        except Exception:
            # Rejected metrics must not leave a refresh thread running
            stop = getattr(metric, "stop", None)
            if callable(stop):
                stop()
            raise

    logger.info(
        f"Registered {len(NODE_OS_METRICS)} OS metrics "
        f"(interval={reporting_interval_in_seconds}s, dimensions={custom_dimensions})"
    )
