from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .models import ScheduleResult, SystemMetrics

SCHEDULE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def footer_cells(system: SystemMetrics) -> list[str]:
    return [
        "",
        "",
        "",
        "",
        f"Average\n{system.avg_waiting:.2f}",
        f"Average\n{system.avg_turnaround:.2f}",
        f"Throughput\n{system.throughput:.2f}/t",
    ]


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process table with a footer carrying averages and throughput.
    """
    footers = footer_cells(result.system) if result.system else [""] * len(SCHEDULE_HEADERS)

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for header, footer in zip(SCHEDULE_HEADERS, footers):
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


def print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.rule(f"[bold]{result.algorithm}[/bold]")
    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            # Offset by the panel's left border and padding.
            console.print("  " + time_marks)

    console.print()
    console.print(build_schedule_table(result))


def build_comparison_table(results: Sequence[ScheduleResult]) -> Table:
    table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")

    for result in results:
        if result.system is None:
            continue
        table.add_row(
            result.algorithm,
            f"{result.system.avg_waiting:.2f}",
            f"{result.system.avg_turnaround:.2f}",
            f"{result.system.throughput:.2f}/t",
        )

    return table
