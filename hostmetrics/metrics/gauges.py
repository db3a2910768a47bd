"""Gauge primitives: read-through gauges and self-refreshing cached gauges."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from .exceptions import SamplingCancelledError

logger = logging.getLogger(__name__)


class Gauge:
    """A metric whose value is computed by ``value_fn`` on every read."""

    metric_type = "gauge"

    def __init__(self, value_fn: Callable[[], Any]):
        self._value_fn = value_fn

    def get_value(self) -> Any:
        return self._value_fn()


class CachedGauge:
    """A gauge refreshed on a background thread and served from cache.

    The refresh thread starts on construction. Readers never wait for an
    in-flight refresh; they get the last completed value, or None until the
    first refresh finishes. A failed refresh is logged and the previous value
    is kept.
    """

    metric_type = "gauge"

    def __init__(
        self,
        value_fn: Callable[[], Any],
        update_interval_in_seconds: float,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the cached gauge and start refreshing.

        Args:
            value_fn: Zero-argument function producing the new value. May block.
            update_interval_in_seconds: Time between the starts of consecutive
                refreshes. A refresh that overruns it is followed immediately
                by the next one.
            stop_event: Event used as the refresh timer. Setting it stops the
                gauge; pass one in to let ``value_fn`` wait on it as well.
        """
        self._value_fn = value_fn
        self.update_interval_in_seconds = update_interval_in_seconds
        self._stop_event = stop_event or threading.Event()
        self._lock = threading.Lock()
        self._value: Any = None
        self._has_value = threading.Event()
        self._thread = threading.Thread(
            target=self._refresh_loop,
            name="CachedGaugeRefresh",
            daemon=True,
        )
        self._thread.start()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def get_value(self) -> Any:
        with self._lock:
            return self._value

    def wait_for_value(self, timeout: Optional[float] = None) -> bool:
        """Block until the first refresh has completed. Returns False on timeout."""
        return self._has_value.wait(timeout)

    def stop(self, timeout: float = 2.0) -> None:
        """Cancel any in-flight refresh and stop the refresh thread."""
        self._stop_event.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    def _refresh_loop(self) -> None:
        while not self._stop_event.is_set():
            started = time.monotonic()
            try:
                value = self._value_fn()
            except SamplingCancelledError:
                break
            except Exception:
                logger.exception("Cached gauge refresh failed, keeping previous value")
            else:
                with self._lock:
                    self._value = value
                self._has_value.set()
            next_start = started + self.update_interval_in_seconds
            self._stop_event.wait(max(0.0, next_start - time.monotonic()))
