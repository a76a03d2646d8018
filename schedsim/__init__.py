"""
schedsim package.

Simulates classic CPU scheduling disciplines (FCFS, SJF, preemptive
priority, round-robin) over a fixed set of processes and reports the
resulting Gantt trace and timing metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .errors import (
    EmptyProcessSet,
    InvalidArguments,
    InvalidQuantum,
    MalformedInput,
    SchedulerError,
)
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult, SimulationSummary

__all__ = [
    "ALGORITHMS",
    "EmptyProcessSet",
    "InvalidArguments",
    "InvalidQuantum",
    "MalformedInput",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerError",
    "SimulationSummary",
    "run_algorithm",
    "run_all",
]
