from __future__ import annotations

from typing import Dict, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan", "bright_red", "bright_green"]


def _time_marks(segments: Sequence[TimelineSegment]) -> str:
    marks = "0"
    last_time = 0
    for seg in segments:
        if seg.start_time > last_time:
            marks += f"{seg.start_time:>3}"
        marks += f"{seg.end_time:>3}"
        last_time = seg.end_time
    return marks


def render_gantt(segments: Sequence[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Idle gaps show as dots.
    """
    if not segments:
        return "(no execution)"

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = " "
    last_time = 0

    for seg in segments:
        idle_gap = seg.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap

        line += "=" * seg.duration
        labels += seg.pid[: seg.duration].ljust(seg.duration)
        last_time = seg.end_time

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels.rstrip(), _time_marks(segments)])


def build_rich_gantt(segments: Sequence[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    last_time = 0

    for seg in segments:
        idle_gap = seg.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)

        timeline.append(" " * seg.duration, style=f"on {pid_color(seg.pid)}")
        labels.append(seg.pid[: seg.duration].ljust(seg.duration), style="bold")
        last_time = seg.end_time

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _time_marks(segments)
