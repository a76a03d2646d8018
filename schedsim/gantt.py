from __future__ import annotations

from typing import Dict, List, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice, ScheduleResult

CELL_WIDTH = 8


def coalesce_slices(slices: Sequence[ScheduledSlice]) -> List[ScheduledSlice]:
    """
    Merge back-to-back slices of the same process into one.

    Tick-driven schedulers emit a slice per time unit; charts read better
    with one cell per uninterrupted run.
    """
    merged: List[ScheduledSlice] = []
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        last = merged[-1] if merged else None
        if last is not None and last.pid == sl.pid and last.end_time == sl.start_time:
            merged[-1] = ScheduledSlice(pid=last.pid, start_time=last.start_time, end_time=sl.end_time)
        else:
            merged.append(sl)
    return merged


def render_title(title: str) -> str:
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one fixed-width cell per run and a line of start
    times closed by the final stop time.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    slices = coalesce_slices(slices)

    cells = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * ((CELL_WIDTH - len(pid)) // 2)
        cells += f"{padding}{pid}{padding}|"

    marks = "\t".join(str(sl.start_time) for sl in slices) + f"\t{slices[-1].end_time}"

    return "\n".join(["Gantt schedule", cells, marks])


def build_rich_gantt(slices: Sequence[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = coalesce_slices(slices)

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = colors[len(pid_to_color) % len(colors)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap)
            labels.append(" " * idle_gap)
            time_marks += f"{sl.start_time:>3}"

        width = max(1, sl.duration)
        label = str(sl.pid)

        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(label[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process schedule table with averages and throughput in the footer.
    """
    summary = result.summary

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    columns = [
        ("ID", ""),
        ("Priority", ""),
        ("Burst", ""),
        ("Arrival", ""),
        ("Wait", f"Average\n{summary.average_waiting:.2f}"),
        ("Turnaround", f"Average\n{summary.average_turnaround:.2f}"),
        ("Exit", f"Throughput\n{summary.throughput:.2f}/t"),
    ]
    for header, footer in columns:
        justify = "center" if header in {"ID", "Priority"} else "right"
        table.add_column(header, footer=footer, justify=justify)

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table
