"""Custom exception hierarchy for metrics collection and registration."""


class MetricsError(Exception):
    """Base exception for all metrics-related errors."""
    pass


class PlatformStatsError(MetricsError):
    """Raised when an operating system statistic cannot be read."""
    pass


class SamplingCancelledError(MetricsError):
    """Raised when a CPU sampling window is interrupted by shutdown."""
    pass


class MetricAlreadyRegisteredError(MetricsError):
    """Raised when a metric name is registered twice in the same registry."""
    pass
