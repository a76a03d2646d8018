from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, run_algorithm
from .errors import InvalidArguments, SchedulerError
from .gantt import build_rich_gantt, build_schedule_table, render_gantt, render_title
from .metrics import cpu_utilization
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise InvalidArguments(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round-robin).",
    )
    parser.add_argument(
        "workload",
        help="Path to a CSV (id,burst,arrival[,priority]) or JSON workload file.",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        action="append",
        choices=list(ALGORITHMS),
        help="Algorithm to run; repeat to run several (default: all, in order fcfs sjf priority rr).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Print one summary row per algorithm instead of full schedules.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch, preemption and idle tick.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(render_title(result.algorithm), markup=False, highlight=False)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()
    console.print(build_schedule_table(result))
    console.print()


def _print_compare(results: Sequence[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response (first dispatch)", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for result in results:
        summary = result.summary
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.average_waiting:.2f}",
            f"{summary.average_turnaround:.2f}",
            f"{summary.average_response:.2f}",
            f"{summary.throughput:.3f}",
            f"{cpu_utilization(result) * 100:.1f}%",
        )

    console.print(summary_table)


def main(argv: List[str] | None = None) -> int:
    console = Console()
    err_console = Console(stderr=True)

    try:
        args = build_parser().parse_args(argv)
    except InvalidArguments as exc:
        err_console.print(f"[red]invalid args:[/red] {escape(str(exc))}")
        return 2

    _configure_logging(args.verbose)

    try:
        processes = load_workload(Path(args.workload))
    except OSError as exc:
        err_console.print(f"[red]error opening scheduling file:[/red] {escape(str(exc))}")
        return 1
    except SchedulerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    algorithms = args.algorithm or list(ALGORITHMS)

    try:
        results = [run_algorithm(alg, processes, quantum=args.quantum) for alg in algorithms]
    except SchedulerError as exc:
        logger.debug("Run aborted", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    if args.compare:
        _print_compare(results, console)
    else:
        for result in results:
            _print_result(result, console, plain=args.plain)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
