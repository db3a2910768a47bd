import logging
import threading
import time
from unittest.mock import MagicMock

import pytest

from hostmetrics.metrics import CachedGauge, CpuCoreSample, CpuUsageSampler, Gauge


def test_gauge_reads_value_on_every_call():
    value_fn = MagicMock(side_effect=[1, 2, 3])
    gauge = Gauge(value_fn)

    assert gauge.get_value() == 1
    assert gauge.get_value() == 2
    assert value_fn.call_count == 2


def test_gauge_propagates_read_failure():
    gauge = Gauge(MagicMock(side_effect=OSError("boom")))

    with pytest.raises(OSError):
        gauge.get_value()


def test_cached_gauge_serves_refreshed_value():
    gauge = CachedGauge(lambda: 42, update_interval_in_seconds=60)
    try:
        assert gauge.wait_for_value(timeout=2.0)
        assert gauge.get_value() == 42
    finally:
        gauge.stop()

    assert gauge.stopped
    assert not gauge._thread.is_alive()


def test_cached_gauge_is_none_before_first_refresh():
    release = threading.Event()
    gauge = CachedGauge(lambda: release.wait(2.0) and 1, update_interval_in_seconds=60)
    try:
        assert gauge.get_value() is None
    finally:
        release.set()
        gauge.stop()


def test_cached_gauge_keeps_previous_value_after_failure(caplog):
    calls = []
    third_call_started = threading.Event()
    release = threading.Event()

    def value_fn():
        calls.append(1)
        if len(calls) == 1:
            return 5
        if len(calls) == 2:
            raise RuntimeError("cpu times unavailable")
        third_call_started.set()
        release.wait(2.0)
        return 7

    caplog.set_level(logging.ERROR, logger="hostmetrics.metrics.gauges")
    gauge = CachedGauge(value_fn, update_interval_in_seconds=0.01)
    try:
        assert third_call_started.wait(2.0)
        assert gauge.get_value() == 5
        assert "refresh failed" in caplog.text
        assert "cpu times unavailable" in caplog.text
    finally:
        release.set()
        gauge.stop()


def test_stop_cancels_in_flight_cpu_sample(make_stats):
    stats = make_stats(cpu_samples=[[CpuCoreSample(10, 100)]])
    stop_event = threading.Event()
    sampler = CpuUsageSampler(60, stop_event, stats=stats)
    gauge = CachedGauge(sampler, update_interval_in_seconds=60, stop_event=stop_event)

    deadline = time.monotonic() + 2.0
    while stats.cpu_reads == 0 and time.monotonic() < deadline:
        time.sleep(0.01)

    started = time.monotonic()
    gauge.stop(timeout=2.0)

    assert time.monotonic() - started < 2.0
    assert not gauge._thread.is_alive()
    assert gauge.get_value() is None
    assert stats.cpu_reads == 1


def test_cached_gauge_refreshes_at_fixed_rate():
    starts = []
    third_refresh = threading.Event()

    def value_fn():
        starts.append(time.monotonic())
        if len(starts) >= 3:
            third_refresh.set()
        time.sleep(0.2)
        return len(starts)

    gauge = CachedGauge(value_fn, update_interval_in_seconds=0.3)
    try:
        assert third_refresh.wait(3.0)
    finally:
        gauge.stop()

    gaps = [later - earlier for earlier, later in zip(starts, starts[1:])]
    assert len(gaps) >= 2
    for gap in gaps[:2]:
        assert 0.25 <= gap < 0.45


def test_cached_gauge_overrunning_refresh_starts_next_immediately():
    starts = []
    third_refresh = threading.Event()

    def value_fn():
        starts.append(time.monotonic())
        if len(starts) >= 3:
            third_refresh.set()
        time.sleep(0.2)
        return len(starts)

    gauge = CachedGauge(value_fn, update_interval_in_seconds=0.05)
    try:
        assert third_refresh.wait(3.0)
    finally:
        gauge.stop()

    gaps = [later - earlier for earlier, later in zip(starts, starts[1:])]
    for gap in gaps[:2]:
        assert gap < 0.35
