"""Immutable CPU tick snapshots used to derive utilization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class CpuCoreSample:
    """Accumulated ticks for one core at a point in time.

    ``total_ticks`` counts idle plus every non-idle mode.
    """

    idle_ticks: float
    total_ticks: float


@dataclass(frozen=True)
class AggregateCpuSample:
    """Idle and total ticks summed across all cores at one instant."""

    idle_ticks: float
    total_ticks: float

    @classmethod
    def from_cores(cls, cores: Iterable[CpuCoreSample]) -> "AggregateCpuSample":
        idle = 0.0
        total = 0.0
        for core in cores:
            idle += core.idle_ticks
            total += core.total_ticks
        return cls(idle_ticks=idle, total_ticks=total)
