import pytest

from hostmetrics import create_app
from hostmetrics.metrics import CpuCoreSample, MetricsRegistry


class FakePlatformStats:
    """Deterministic PlatformStats returning fixture values.

    ``cpu_samples`` is consumed one reading at a time; the last reading
    repeats once the list is exhausted.
    """

    def __init__(self, cpu_samples=None):
        self.loadavg = (0.5, 1.25, 2.75)
        self.freemem = 2 * 1024 ** 3
        self.totalmem = 8 * 1024 ** 3
        self.uptime_seconds = 12345.0
        self.cpu_samples = list(cpu_samples or [[CpuCoreSample(0.0, 0.0)]])
        self.cpu_reads = 0

    def load_average(self):
        return self.loadavg

    def free_memory(self):
        return self.freemem

    def total_memory(self):
        return self.totalmem

    def uptime(self):
        return self.uptime_seconds

    def cpu_core_samples(self):
        index = min(self.cpu_reads, len(self.cpu_samples) - 1)
        self.cpu_reads += 1
        sample = self.cpu_samples[index]
        if isinstance(sample, Exception):
            raise sample
        return sample


@pytest.fixture()
def fake_stats():
    return FakePlatformStats()


@pytest.fixture()
def registry():
    """A registry without a reporter, shut down after the test."""
    registry = MetricsRegistry()
    try:
        yield registry
    finally:
        registry.reset()


@pytest.fixture()
def app():
    """
    Creates a test Flask application instance with testing-specific configuration.
    """
    config_overrides = {
        "TESTING": True,
        "METRICS_ENABLED": False,
        "METRICS_LOG_REPORTER_ENABLED": False,
    }
    app = create_app(config_overrides)
    try:
        yield app
    finally:
        app.metrics_registry.reset()


@pytest.fixture()
def client(app):
    """A test client for the app."""
    with app.app_context():
        yield app.test_client()


@pytest.fixture()
def make_stats():
    """Factory for FakePlatformStats with custom CPU readings."""
    return FakePlatformStats
