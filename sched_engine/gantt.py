from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionInterval

PALETTE = [
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#EC4899",
    "#14B8A6",
    "#F97316",
    "#6366F1",
    "#84CC16",
]


def assign_colors(timeline: Sequence[ExecutionInterval], palette: Sequence[str] = PALETTE) -> Dict[str, str]:
    """
    Give each distinct pid a color in order of first appearance, cycling the
    palette when there are more pids than colors.
    """
    pid_to_color: Dict[str, str] = {}
    for iv in timeline:
        if iv.is_idle or iv.pid in pid_to_color:
            continue
        pid_to_color[iv.pid] = palette[len(pid_to_color) % len(palette)]
    return pid_to_color


def render_gantt(timeline: Sequence[ExecutionInterval]) -> str:
    """
    Plain-text Gantt chart renderer.
    """
    if not timeline:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0

    for iv in timeline:
        idle_gap = iv.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = iv.start_time
            time_marks += f"{last_time:>3}"

        width = iv.duration
        line += ("." if iv.is_idle else "=") * width
        labels += ("" if iv.is_idle else iv.pid[:width]).ljust(width)
        last_time = iv.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(timeline: Sequence[ExecutionInterval]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not timeline:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = assign_colors(timeline)

    bar = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for iv in timeline:
        idle_gap = iv.start_time - last_time
        if idle_gap > 0:
            bar.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = iv.start_time
            time_marks += f"{last_time:>3}"

        width = iv.duration
        if iv.is_idle:
            bar.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            bar.append(" " * width, style=f"on {colors[iv.pid]}")
            labels.append(iv.pid[:width].ljust(width), style="bold")

        last_time = iv.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def execution_log(timeline: Sequence[ExecutionInterval]) -> List[Tuple[int, str, int, int, int]]:
    """
    One row per interval: (1-based index, pid, start, end, duration).
    """
    return [(n, iv.pid, iv.start_time, iv.end_time, iv.duration) for n, iv in enumerate(timeline, start=1)]


def replay_frames(timeline: Sequence[ExecutionInterval]) -> Iterator[Tuple[ExecutionInterval, ...]]:
    """
    Yield growing prefixes of an already computed timeline, one block per
    frame, for animated playback.
    """
    frozen = tuple(timeline)
    for visible in range(1, len(frozen) + 1):
        yield frozen[:visible]
