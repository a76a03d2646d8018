from __future__ import annotations

from typing import Sequence

from .errors import EmptyProcessSet
from .models import ProcessMetrics, ScheduleResult, SimulationSummary


def summarize(processes: Sequence[ProcessMetrics]) -> SimulationSummary:
    """
    Average waiting/turnaround/response times and throughput for a finished run.

    Throughput is measured against the completion time of whichever process
    finishes last.
    """
    if not processes:
        raise EmptyProcessSet("cannot summarize a schedule with no processes")

    n = len(processes)
    last_completion = max(p.completion_time for p in processes)

    return SimulationSummary(
        average_waiting=sum(p.waiting_time for p in processes) / n,
        average_turnaround=sum(p.turnaround_time for p in processes) / n,
        throughput=n / last_completion,
        average_response=sum(p.response_time for p in processes) / n,
    )


def cpu_busy_time(result: ScheduleResult) -> int:
    """Total time the CPU spent running processes, idle gaps excluded."""
    return sum(slice_.duration for slice_ in result.timeline)


def cpu_utilization(result: ScheduleResult) -> float:
    """Fraction of the makespan the CPU was busy (0.0 for an empty schedule)."""
    makespan = result.makespan
    return cpu_busy_time(result) / makespan if makespan > 0 else 0.0
