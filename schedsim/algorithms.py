from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .errors import InvalidArguments, InvalidQuantum
from .ledger import TimingLedger
from .models import Process, ScheduleResult

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 10


def _serve_in_order(processes: Sequence[Process], title: str) -> ScheduleResult:
    """
    Run each process to completion in the given order, idling until it
    arrives when the CPU is free before then.
    """
    ledger = TimingLedger(processes)
    service_time = 0

    for i, p in enumerate(ledger.processes):
        start = max(service_time, p.arrival_time)
        if start > service_time:
            logger.debug("t=%d: idle until %d", service_time, start)
        service_time = ledger.run(i, start, p.burst_time).end_time

    return ScheduleResult(algorithm=title, quantum=None, processes=ledger.rows(), timeline=ledger.timeline)


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    The input order is taken as the ready order; it is not re-sorted by
    arrival time.
    """
    if any(a.arrival_time > b.arrival_time for a, b in zip(processes, processes[1:])):
        logger.warning("FCFS input is not ordered by arrival time; serving in input order")

    return _serve_in_order(processes, "First-come, first-serve")


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive, static).

    The whole set is sorted by burst time once, up front (equal bursts keep
    their input order), and then served exactly like FCFS. A shorter job that
    arrives later is not reconsidered.
    """
    # sorted() copies, so the caller's sequence keeps its order.
    by_burst = sorted(processes, key=lambda p: p.burst_time)
    return _serve_in_order(by_burst, "Shortest-job-first")


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive priority scheduling, simulated one time unit at a time.

    Lower numeric priority value means higher priority. At every tick the
    first process (in input order) holding the smallest priority among the
    arrived, unfinished ones gets the CPU, so only a strictly smaller value
    preempts. One slice is emitted per busy tick.
    """
    ledger = TimingLedger(processes)
    time = 0
    running: Optional[int] = None

    while not ledger.done:
        ready = ledger.eligible(time)
        if not ready:
            # Idle ticks change nothing, so skip straight to the next arrival.
            next_time = ledger.next_arrival(time)
            logger.debug("t=%d: idle until %d", time, next_time)
            time = next_time
            continue

        # min() keeps the first of equal keys, i.e. scan order breaks ties.
        selected = min(ready, key=lambda i: ledger.processes[i].priority)
        if running is not None and running != selected and ledger.remaining[running] > 0:
            logger.debug(
                "t=%d: process %s preempts process %s",
                time,
                ledger.processes[selected].pid,
                ledger.processes[running].pid,
            )

        ledger.run(selected, time, 1)
        running = selected
        time += 1

    return ScheduleResult(algorithm="Priority", quantum=None, processes=ledger.rows(), timeline=ledger.timeline)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Each round scans the processes in input order and gives every arrived,
    unfinished one up to ``quantum`` units starting at the current time.
    Processes that arrive while the scan is in progress are picked up in the
    same round if they come later in the input. A round that dispatches
    nothing leaves the CPU idle until the next arrival.
    """
    if quantum is None or isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidQuantum(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    ledger = TimingLedger(processes)
    time = 0

    while not ledger.done:
        dispatched = False
        for i, p in enumerate(ledger.processes):
            if p.arrival_time <= time and ledger.remaining[i] > 0:
                time = ledger.run(i, time, quantum).end_time
                dispatched = True

        if not dispatched:
            next_time = ledger.next_arrival(time)
            logger.debug("t=%d: idle until %d", time, next_time)
            time = next_time

    return ScheduleResult(algorithm="Round-robin", quantum=quantum, processes=ledger.rows(), timeline=ledger.timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise InvalidArguments(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[key]
    result = func(processes, quantum=quantum if key == "rr" else None)
    logger.debug("%s finished at t=%d", result.algorithm, result.makespan)
    return result


def run_all(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> List[ScheduleResult]:
    """
    Run every discipline against the same read-only process list, in the
    order FCFS, SJF, Priority, Round-robin.
    """
    return [run_algorithm(name, processes, quantum=quantum) for name in ALGORITHMS]
