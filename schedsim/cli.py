from __future__ import annotations

import argparse
import logging
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, run_algorithm
from .errors import InvalidArgumentsError, SchedulerError
from .models import ScheduleResult
from .report import build_comparison_table, print_result
from .workload_io import load_workload

DEFAULT_ALGORITHMS = ["fcfs", "srtf", "priority"]


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise InvalidArgumentsError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SRTF, preemptive Priority).",
    )
    parser.add_argument(
        "workload",
        help="Path to the scheduling file (CSV rows: pid, burst, arrival[, priority]; or .json).",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=DEFAULT_ALGORITHMS,
        help="Algorithms to run, in order (default: fcfs srtf priority).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also print a table comparing average metrics across the algorithms run.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt schedule as plain text instead of a colored panel.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for every scheduling decision).",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    err_console = Console(stderr=True)

    try:
        args = parser.parse_args(argv)
    except InvalidArgumentsError as exc:
        err_console.print(parser.format_usage(), end="", markup=False, highlight=False)
        err_console.print(f"[red]invalid args:[/red] {escape(str(exc))}")
        return 2

    _configure_logging(args.verbose)
    console = Console()

    try:
        processes = load_workload(args.workload)
        results: List[ScheduleResult] = []
        for alg in args.algorithms:
            result = run_algorithm(alg, processes)
            print_result(result, console, plain=args.plain)
            console.print()
            results.append(result)
    except SchedulerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    if args.compare:
        console.print(build_comparison_table(results))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
