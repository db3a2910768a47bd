"""Thread-safe metrics registry with optional self reporting per interval."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exceptions import MetricAlreadyRegisteredError

logger = logging.getLogger(__name__)

DEFAULT_REPORTING_INTERVAL_IN_SECONDS = 30


@dataclass
class RegisteredMetric:
    name: str
    metric: object
    dimensions: Dict[str, str] = field(default_factory=dict)
    interval_seconds: float = DEFAULT_REPORTING_INTERVAL_IN_SECONDS

    def read(self) -> Dict[str, object]:
        """Read the metric, turning a failed read into an error entry."""
        entry: Dict[str, object] = {
            "name": self.name,
            "type": getattr(self.metric, "metric_type", "unknown"),
            "dimensions": dict(self.dimensions),
            "interval_seconds": self.interval_seconds,
        }
        try:
            entry["value"] = self.metric.get_value()
        except Exception as exc:
            logger.error(f"Error reading metric {self.name}: {exc}")
            entry["value"] = None
            entry["error"] = str(exc)
        return entry


class MetricsRegistry:
    """Registry owning metric instances, their dimensions and reporting cadence.

    When a reporter is supplied, one daemon thread per distinct interval hands
    the readings of the metrics registered with that interval to
    ``reporter.report_metrics`` every period.
    """

    def __init__(
        self,
        reporter=None,
        default_interval_seconds: float = DEFAULT_REPORTING_INTERVAL_IN_SECONDS,
    ):
        self._metrics: Dict[str, RegisteredMetric] = {}
        self._lock = threading.Lock()
        self._reporter = reporter
        self.default_interval_seconds = default_interval_seconds

        self._report_threads: Dict[float, threading.Thread] = {}
        self._stop_event = threading.Event()

    def register(
        self,
        name: str,
        metric,
        dimensions: Optional[Dict[str, str]] = None,
        interval_seconds: Optional[float] = None,
    ) -> None:
        interval = interval_seconds or self.default_interval_seconds
        with self._lock:
            if name in self._metrics:
                raise MetricAlreadyRegisteredError(f"Metric {name} is already registered")
            self._metrics[name] = RegisteredMetric(
                name=name,
                metric=metric,
                dimensions=dimensions if dimensions is not None else {},
                interval_seconds=interval,
            )
            if self._reporter is not None:
                self._ensure_report_thread_locked(interval)
        logger.debug(f"Registered metric {name} (interval={interval}s)")

    def get_metric(self, name: str):
        with self._lock:
            registered = self._metrics.get(name)
        return registered.metric if registered else None

    def names(self) -> List[str]:
        with self._lock:
            return list(self._metrics.keys())

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._metrics

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)

    def read(self, name: str) -> Optional[Dict[str, object]]:
        """Return the current reading for one metric, or None if unknown."""
        with self._lock:
            registered = self._metrics.get(name)
        if registered is None:
            return None
        return registered.read()

    def get_snapshot(self) -> Dict[str, object]:
        with self._lock:
            registered = list(self._metrics.values())

        return {
            "enabled": True,
            "generated_at": time.time(),
            "metrics": [metric.read() for metric in registered],
        }

    def _ensure_report_thread_locked(self, interval: float) -> None:
        thread = self._report_threads.get(interval)
        if thread and thread.is_alive():
            return
        thread = threading.Thread(
            target=self._report_loop,
            args=(interval, self._stop_event),
            name=f"MetricsReporter-{interval}s",
            daemon=True,
        )
        self._report_threads[interval] = thread
        thread.start()

    def _report_loop(self, interval: float, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval):
            with self._lock:
                due = [m for m in self._metrics.values() if m.interval_seconds == interval]
            try:
                self._reporter.report_metrics([metric.read() for metric in due])
            except Exception:
                logger.exception(f"Reporter failed for {interval}s interval")

    def shutdown(self) -> None:
        """Stop reporting threads and every metric that owns a timer."""
        self._stop_event.set()
        with self._lock:
            threads = list(self._report_threads.values())
            self._report_threads.clear()
            metrics = [registered.metric for registered in self._metrics.values()]

        for thread in threads:
            if thread.is_alive():
                thread.join(timeout=1.0)
        for metric in metrics:
            stop = getattr(metric, "stop", None)
            if callable(stop):
                stop()

    def reset(self) -> None:
        """Shut down and forget all metrics. Intended for test isolation."""
        self.shutdown()
        with self._lock:
            self._metrics.clear()
            self._stop_event = threading.Event()
