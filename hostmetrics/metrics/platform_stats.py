"""Operating system statistics behind an injectable provider interface."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, List, Protocol, Tuple

import psutil

from .exceptions import PlatformStatsError
from .samples import CpuCoreSample

# Linux reports guest time inside user/nice already.
_DOUBLE_COUNTED_CPU_FIELDS = ("guest", "guest_nice")


class PlatformStats(Protocol):
    """Source of the raw OS statistics the metric catalog reads."""

    def load_average(self) -> Tuple[float, float, float]: ...

    def free_memory(self) -> int: ...

    def total_memory(self) -> int: ...

    def uptime(self) -> float: ...

    def cpu_core_samples(self) -> List[CpuCoreSample]: ...


@contextmanager
def _reading(stat_name: str) -> Iterator[None]:
    """Translate psutil and OS failures into PlatformStatsError."""
    try:
        yield
    except (OSError, psutil.Error) as exc:
        raise PlatformStatsError(f"Unable to read {stat_name}: {exc}") from exc


def _core_sample_from_times(times) -> CpuCoreSample:
    fields = times._asdict()
    for name in _DOUBLE_COUNTED_CPU_FIELDS:
        fields.pop(name, None)
    return CpuCoreSample(
        idle_ticks=float(fields["idle"]),
        total_ticks=float(sum(fields.values())),
    )


class PsutilPlatformStats:
    """PlatformStats implementation backed by psutil."""

    def load_average(self) -> Tuple[float, float, float]:
        with _reading("load average"):
            one, five, fifteen = psutil.getloadavg()
        return one, five, fifteen

    def free_memory(self) -> int:
        with _reading("free memory"):
            return psutil.virtual_memory().available

    def total_memory(self) -> int:
        with _reading("total memory"):
            return psutil.virtual_memory().total

    def uptime(self) -> float:
        with _reading("uptime"):
            return time.time() - psutil.boot_time()

    def cpu_core_samples(self) -> List[CpuCoreSample]:
        with _reading("cpu times"):
            per_core = psutil.cpu_times(percpu=True)
        if not per_core:
            raise PlatformStatsError("Unable to read cpu times: no cores reported")
        return [_core_sample_from_times(times) for times in per_core]


# Shared provider used when a factory is not given one.
default_platform_stats = PsutilPlatformStats()
