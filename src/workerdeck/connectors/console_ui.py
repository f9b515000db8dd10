# src/workerdeck/connectors/console_ui.py

"""Rich rendering for the console: shared Console, status table and live watch view."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.theme import Theme

from ..tasks.task_models import TaskSnapshot

_console: Console | None = None


def get_console() -> Console:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        theme = Theme(
            {
                "info": "cyan",
                "warning": "yellow",
                "error": "red",
                "executing": "bold black on green",
                "idle": "dim",
                "running": "green",
                "stopped": "red",
            }
        )
        _console = Console(theme=theme)
    return _console


def render_status_table(snapshots: Iterable[TaskSnapshot], *, title: str = "Workers") -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Loop")
    table.add_column("Work")

    for pos, snap in enumerate(snapshots, start=1):
        loop_cell = "[running]running[/]" if snap.running else "[stopped]stopped[/]"
        work_cell = "[executing] EXECUTING [/]" if snap.executing else "[idle]idle[/]"
        table.add_row(str(pos), snap.name, loop_cell, work_cell)

    return table


def watch_status(
    poll: Callable[[], list[TaskSnapshot]],
    *,
    seconds: float,
    interval: float = 0.1,
    console: Console | None = None,
) -> int:
    """
    Redraw the status table every `interval` seconds for `seconds` seconds.

    `poll` must be cheap and non-blocking; it runs on the console thread.
    Returns the number of polls made. Ctrl+C ends the watch early.
    """
    console = console or get_console()
    interval = max(0.02, float(interval))
    deadline = time.monotonic() + max(0.0, float(seconds))
    polls = 0

    try:
        with Live(render_status_table(poll()), console=console, auto_refresh=False) as live:
            polls += 1
            while time.monotonic() < deadline:
                time.sleep(interval)
                live.update(render_status_table(poll()), refresh=True)
                polls += 1
    except KeyboardInterrupt:
        pass

    return polls
