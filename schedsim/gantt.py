from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice


class TimelineBuilder:
    """
    Collects single-tick executions into maximal contiguous slices.

    ``record_tick`` opens a new slice whenever the running process changes;
    ``close_tick`` moves the stop of the newest slice forward. Back-to-back
    ticks of the same process end up in one slice; a gap starts a new one.
    """

    def __init__(self) -> None:
        self.slices: List[ScheduledSlice] = []

    def record_tick(self, pid: int, tick: int) -> None:
        last = self.slices[-1] if self.slices else None
        # Only a slice ending exactly at this tick can be extended.
        if last is None or last.pid != pid or last.end_time != tick:
            self.slices.append(ScheduledSlice(pid=pid, start_time=tick, end_time=tick))

    def close_tick(self, tick: int) -> None:
        if self.slices:
            self.slices[-1].end_time = tick

    def add_slice(self, pid: int, start_time: int, end_time: int) -> None:
        """
        Record a whole run at once (non-preemptive policies).
        """
        self.record_tick(pid, start_time)
        self.close_tick(end_time)


def time_marks(slices: List[ScheduledSlice]) -> List[int]:
    """
    Start of every slice followed by the stop of the last one.
    """
    if not slices:
        return []
    return [sl.start_time for sl in slices] + [slices[-1].end_time]


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one centred pid cell per slice, ticks underneath.
    """
    if not slices:
        return "(no execution)"

    cells = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * ((8 - len(pid)) // 2) if len(pid) < 8 else ""
        cells += f"{padding}{pid}{padding}|"

    marks = "\t".join(str(t) for t in time_marks(slices))

    return "\n".join(
        [
            "Gantt schedule",
            cells,
            marks,
        ]
    )


def _place_mark(marks: str, column: int, tick: int) -> str:
    # Marks sit under the column where their slice starts; overlong ones push right.
    padded = marks.ljust(column)
    if padded and not padded.endswith(" "):
        padded += " "
    return padded + str(tick)


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    marks = ""
    last_time = slices[0].start_time

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)

        width = max(1, sl.end_time - sl.start_time)
        color = pid_color(sl.pid)

        marks = _place_mark(marks, len(timeline), sl.start_time)

        timeline.append(" " * width, style=f"on {color}")
        labels.append(str(sl.pid)[:width].ljust(width), style="bold")

        last_time = sl.end_time

    marks = _place_mark(marks, len(timeline), last_time)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, marks
