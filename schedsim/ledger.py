from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .errors import EmptyProcessSet, MalformedInput
from .models import Process, ProcessMetrics, ScheduledSlice

logger = logging.getLogger(__name__)


def check_processes(processes: Sequence[Process]) -> None:
    """
    Reject inputs no discipline can schedule: an empty set or repeated pids.
    """
    if not processes:
        raise EmptyProcessSet("no processes to schedule")

    seen: set[int] = set()
    for p in processes:
        if p.pid in seen:
            raise MalformedInput(f"duplicate process id {p.pid}")
        seen.add(p.pid)


class TimingLedger:
    """
    Mutable per-run state of a tick-driven simulation.

    Entries are indexed by position in the input sequence. A ledger belongs to
    exactly one algorithm invocation; the processes themselves are never
    touched.
    """

    def __init__(self, processes: Sequence[Process]) -> None:
        check_processes(processes)
        self.processes: List[Process] = list(processes)
        self.remaining: List[int] = [p.burst_time for p in self.processes]
        self.timeline: List[ScheduledSlice] = []
        self.completed = 0
        # Insertion order is first-dispatch order.
        self._rows: Dict[int, ProcessMetrics] = {}

    @property
    def done(self) -> bool:
        return self.completed == len(self.processes)

    def eligible(self, time: int) -> List[int]:
        """Indices of arrived, unfinished processes in input order."""
        return [
            i
            for i, p in enumerate(self.processes)
            if p.arrival_time <= time and self.remaining[i] > 0
        ]

    def next_arrival(self, time: int) -> int:
        """Earliest arrival after ``time`` among unfinished processes."""
        return min(
            p.arrival_time
            for i, p in enumerate(self.processes)
            if p.arrival_time > time and self.remaining[i] > 0
        )

    def run(self, index: int, start: int, length: int) -> ScheduledSlice:
        """
        Give the CPU to process ``index`` for ``length`` units from ``start``.

        The first call for a process records its time to first dispatch; the
        call that drains its remaining time finalizes completion, turnaround
        and the accumulated waiting time.
        """
        p = self.processes[index]
        length = min(length, self.remaining[index])

        if index not in self._rows:
            response = start - p.arrival_time
            self._rows[index] = ProcessMetrics(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=response,  # final value set at completion
                turnaround_time=0,
                completion_time=0,
                response_time=response,
            )
            logger.debug("t=%d: process %s dispatched after waiting %d", start, p.pid, response)

        slice_ = ScheduledSlice(pid=p.pid, start_time=start, end_time=start + length)
        self.timeline.append(slice_)
        self.remaining[index] -= length

        if self.remaining[index] == 0:
            row = self._rows[index]
            row.completion_time = slice_.end_time
            row.turnaround_time = row.completion_time - p.arrival_time
            row.waiting_time = row.turnaround_time - p.burst_time
            self.completed += 1
            logger.debug("t=%d: process %s completed", slice_.end_time, p.pid)

        return slice_

    def rows(self) -> List[ProcessMetrics]:
        return list(self._rows.values())
