from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class RemainingWork:
    """
    Mutable per-run shadow of a Process. Each simulation builds its own.
    """

    process: Process
    remaining: int

    @classmethod
    def for_process(cls, process: Process) -> "RemainingWork":
        return cls(process=process, remaining=process.burst_time)

    @property
    def done(self) -> bool:
        return self.remaining == 0


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class SystemMetrics:
    avg_waiting: float
    avg_turnaround: float
    throughput: float


@dataclass
class ScheduleResult:
    algorithm: str
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
