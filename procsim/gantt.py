from __future__ import annotations

from typing import Dict, Iterable, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice, TickRecord

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

RUN_CELL = "█"
READY_CELL = "░"
IDLE_CELL = "·"


def slices_from_ticks(ticks: List[TickRecord]) -> List[ScheduledSlice]:
    """
    Collapse runs of consecutive ticks on the same process into slices.
    Idle ticks break a run and produce no slice.
    """
    slices: List[ScheduledSlice] = []
    for record in ticks:
        if record.running is None:
            continue
        last = slices[-1] if slices else None
        if last is not None and last.name == record.running and last.end_time == record.time:
            last.end_time = record.time + 1
        else:
            slices.append(ScheduledSlice(name=record.running, start_time=record.time, end_time=record.time + 1))
    return slices


def build_rich_gantt(ticks: List[TickRecord], names: Iterable[str]) -> Panel:
    """
    One lane per process, one cell per tick: a solid block while running, a
    shaded block while ready. Ticks where no process was active are dotted in
    the time axis.
    """
    if not ticks:
        return Panel("No execution", title="Gantt Chart")

    start = ticks[0].time
    end = ticks[-1].time + 1
    by_time: Dict[int, TickRecord] = {r.time: r for r in ticks}

    axis = Text()
    for t in range(start, end):
        if t in by_time:
            axis.append(str(t % 10), style="dim")
        else:
            axis.append(IDLE_CELL, style="dim")

    table = Table.grid(padding=(0, 1))
    table.add_column(justify="right", style="bold")
    table.add_column(no_wrap=True)
    table.add_row("t", axis)

    for i, name in enumerate(dict.fromkeys(names)):
        color = COLORS[i % len(COLORS)]
        lane = Text()
        for t in range(start, end):
            record = by_time.get(t)
            if record is not None and record.running == name:
                lane.append(RUN_CELL, style=color)
            elif record is not None and name in record.ready:
                lane.append(READY_CELL, style=f"dim {color}")
            else:
                lane.append(" ")
        table.add_row(name, lane)

    return Panel.fit(table, title="Gantt Chart", subtitle=f"t={start}..{end - 1}")
