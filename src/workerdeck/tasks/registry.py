# src/workerdeck/tasks/registry.py

"""
Task registry: the thin driver around the roster.

Fans out start/stop to every task, forwards manual triggers by position and
hands out status snapshots for the console. stop_all() stops tasks concurrently,
so the whole roster shuts down within roughly one grace period.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Iterator

from ..core.ports import LogSink
from .scheduled_task import ScheduledTask
from .task_models import TaskSnapshot

logger = logging.getLogger(__name__)


class TaskRegistry:
    def __init__(self, tasks: Iterable[ScheduledTask], log: LogSink) -> None:
        self._tasks: tuple[ScheduledTask, ...] = tuple(tasks)
        self._log = log

    @property
    def tasks(self) -> tuple[ScheduledTask, ...]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[ScheduledTask]:
        return iter(self._tasks)

    def get(self, index: int) -> ScheduledTask:
        """Task at 0-based roster position. Negative indices are rejected."""
        if index < 0 or index >= len(self._tasks):
            raise IndexError(f"task index out of range: {index} (have {len(self._tasks)})")
        return self._tasks[index]

    # ---- control (event loop thread) ----

    def start_all(self) -> None:
        self._log.log_message("Starting all worker threads...")
        for task in self._tasks:
            try:
                task.start()
            except Exception:
                logger.exception("Failed to start %s", task.name)
        self._log.log_message("All workers started successfully.")

    async def stop_all(self) -> None:
        self._log.log_message("Stopping all worker threads...")
        results = await asyncio.gather(*(t.stop() for t in self._tasks), return_exceptions=True)
        for task, res in zip(self._tasks, results):
            if isinstance(res, BaseException):
                logger.error("Failed to stop %s", task.name, exc_info=res)
        self._log.log_message("All workers stopped.")

    def start(self, index: int) -> None:
        self.get(index).start()

    async def stop(self, index: int) -> None:
        await self.get(index).stop()

    def trigger_manual(self, index: int) -> asyncio.Task[None] | None:
        """
        Manually run the task at `index`.

        Returns the spawned execution, or None if the task was already busy.
        The task re-checks `executing` itself, so a run that slips in between
        is still skipped (and logged) there.
        """
        task = self.get(index)
        if task.executing:
            self._log.log_message(f"{task.name} is already executing. Manual execution skipped.")
            return None

        self._log.log_message(f"Manual execution triggered for {task.name}")
        return task.execute_manually()

    # ---- status (any thread) ----

    def snapshot(self) -> list[TaskSnapshot]:
        return [t.snapshot() for t in self._tasks]
