from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MalformedInput


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a valid time or id
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInput(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("pid", "arrival_time", "burst_time", "priority"):
            _require_int(name, getattr(self, name))
        if self.arrival_time < 0:
            raise MalformedInput(f"process {self.pid}: arrival_time must be >= 0, got {self.arrival_time}")
        if self.burst_time <= 0:
            raise MalformedInput(f"process {self.pid}: burst_time must be > 0, got {self.burst_time}")


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int
    response_time: int = 0


@dataclass(frozen=True)
class SimulationSummary:
    average_waiting: float
    average_turnaround: float
    throughput: float
    average_response: float = 0.0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)

    @property
    def summary(self) -> SimulationSummary:
        """
        Aggregate metrics, always recomputed from the rows actually produced.
        """
        from .metrics import summarize

        return summarize(self.processes)

    @property
    def makespan(self) -> int:
        return max((p.completion_time for p in self.processes), default=0)
