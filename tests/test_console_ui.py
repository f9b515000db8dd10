# tests/test_console_ui.py

from __future__ import annotations

import io

from rich.console import Console

from workerdeck.connectors.console_ui import render_status_table, watch_status
from workerdeck.tasks.task_models import TaskSnapshot


def _snaps(executing: bool = False) -> list[TaskSnapshot]:
    return [
        TaskSnapshot(task_id=1, name="Address Lookup", running=True, executing=executing),
        TaskSnapshot(task_id=2, name="Send Email", running=False, executing=False),
    ]


def test_status_table_marks_executing_workers() -> None:
    buf = io.StringIO()
    console = Console(file=buf, width=120, force_terminal=False)
    console.print(render_status_table(_snaps(executing=True)))

    out = buf.getvalue()
    assert "Address Lookup" in out
    assert "EXECUTING" in out
    assert "stopped" in out


def test_watch_status_polls_on_interval() -> None:
    calls: list[int] = []

    def poll() -> list[TaskSnapshot]:
        calls.append(1)
        return _snaps()

    console = Console(file=io.StringIO(), width=120, force_terminal=False)
    polls = watch_status(poll, seconds=0.2, interval=0.05, console=console)

    assert polls == len(calls)
    assert 3 <= polls <= 8
