# src/workerdeck/tasks/roster.py

"""
The fixed roster of demo workers.

Each entry only differs in timing and in how long its simulated work takes,
so one ScheduledTask type plus this table covers all of them.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from ..core.ports import LogSink
from .scheduled_task import DEFAULT_STOP_GRACE_SECONDS, ScheduledTask
from .task_models import DurationRange, TaskSpec
from .work import simulated_work


def _spec(
    task_id: int,
    name: str,
    initial: timedelta,
    regular: timedelta,
    low: float,
    high: float,
) -> TaskSpec:
    return TaskSpec(
        task_id=task_id,
        name=name,
        initial_interval=initial,
        regular_interval=regular,
        work_duration=DurationRange(low, high),
    )


DEFAULT_ROSTER: tuple[TaskSpec, ...] = (
    _spec(1, "Address Lookup", timedelta(seconds=6), timedelta(minutes=1), 0.5, 1.5),
    _spec(2, "Send Email", timedelta(seconds=5), timedelta(seconds=12), 1.0, 3.0),
    _spec(3, "Send Text", timedelta(seconds=4), timedelta(seconds=12), 0.5, 2.0),
    _spec(4, "Email Status", timedelta(seconds=4.5), timedelta(minutes=10), 1.5, 4.0),
    _spec(5, "Text Status", timedelta(seconds=1), timedelta(minutes=2), 0.8, 1.8),
    _spec(6, "Auto Incomplete Visit Roll", timedelta(seconds=6.5), timedelta(minutes=10), 2.0, 5.0),
    _spec(7, "Create Reminder Instances", timedelta(seconds=7.5), timedelta(seconds=30), 1.0, 2.5),
    _spec(8, "Reminders", timedelta(seconds=8), timedelta(minutes=30), 1.5, 3.5),
    _spec(9, "Data Import", timedelta(seconds=5.5), timedelta(seconds=10), 0.3, 1.1),
    _spec(10, "Data Cleanup", timedelta(seconds=60), timedelta(hours=12), 3.0, 7.0),
    _spec(11, "Payment Transaction Check", timedelta(seconds=9), timedelta(hours=12), 2.0, 4.5),
    _spec(12, "Sandbox Purge", timedelta(seconds=8.5), timedelta(hours=10), 2.5, 6.0),
    _spec(13, "Company Backup", timedelta(seconds=20), timedelta(seconds=10), 0.8, 2.0),
    _spec(14, "Company Restore", timedelta(seconds=21), timedelta(seconds=10), 1.0, 2.5),
    _spec(15, "Six Hour", timedelta(seconds=7), timedelta(hours=6), 4.0, 9.0),
    _spec(16, "TenDlc", timedelta(seconds=8.5), timedelta(days=15), 5.0, 11.0),
)


def build_tasks(
    log: LogSink,
    *,
    specs: Iterable[TaskSpec] = DEFAULT_ROSTER,
    stop_grace_seconds: float = DEFAULT_STOP_GRACE_SECONDS,
) -> list[ScheduledTask]:
    return [
        ScheduledTask(
            spec.task_id,
            spec.name,
            initial_interval=spec.initial_interval,
            regular_interval=spec.regular_interval,
            work=simulated_work(spec.work_duration),
            log=log,
            stop_grace_seconds=stop_grace_seconds,
        )
        for spec in specs
    ]
