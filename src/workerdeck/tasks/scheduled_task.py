# src/workerdeck/tasks/scheduled_task.py

from __future__ import annotations

"""
Scheduled task.

One periodic worker with a two-phase timer:
- wait initial_interval, run once,
- then wait regular_interval between every later run.

Manual runs can be requested at any time (even when the task is stopped).
Automatic and manual runs share the `executing` flag, so the work body never overlaps itself.

All state is owned by a single event loop. Flags are only written from coroutines running
on that loop, and a check-and-set without an `await` in between cannot interleave with
another coroutine. Other threads (the status poller) only read the flags.
"""

import asyncio
import logging
import time
from datetime import timedelta

from ..core.ports import LogSink, WorkBody
from .task_models import TaskSnapshot

logger = logging.getLogger(__name__)

DEFAULT_STOP_GRACE_SECONDS = 5.0

_UNITS = (
    (86400.0, "day"),
    (3600.0, "hour"),
    (60.0, "minute"),
)


def describe_interval(interval: timedelta) -> str:
    """
    Human-readable interval in the largest unit that is >= 1.

    >>> describe_interval(timedelta(days=15))
    '15 day(s)'
    >>> describe_interval(timedelta(seconds=4.5))
    '4.5 second(s)'
    """
    seconds = interval.total_seconds()
    for size, unit in _UNITS:
        if seconds >= size:
            return f"{_format_amount(seconds / size)} {unit}(s)"
    return f"{_format_amount(seconds)} second(s)"


def _format_amount(value: float) -> str:
    # Fixed-point so very long intervals never switch to exponent notation.
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _cancel_requested() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class ScheduledTask:
    def __init__(
        self,
        task_id: int,
        name: str,
        *,
        initial_interval: timedelta,
        regular_interval: timedelta,
        work: WorkBody,
        log: LogSink,
        stop_grace_seconds: float = DEFAULT_STOP_GRACE_SECONDS,
    ) -> None:
        if initial_interval < timedelta(0) or regular_interval < timedelta(0):
            raise ValueError(f"intervals must be non-negative (task {task_id} {name!r})")

        self._task_id = int(task_id)
        self._name = name
        self._initial_interval = initial_interval
        self._regular_interval = regular_interval
        self._work = work
        self._log = log
        self.stop_grace_seconds = max(0.0, float(stop_grace_seconds))

        self._running = False
        self._executing = False
        self._has_run_initial = False

        self._loop_task: asyncio.Task[None] | None = None
        # Strong refs: the event loop only keeps weak references to tasks.
        self._manual_tasks: set[asyncio.Task[None]] = set()

    # ---- read-only view ----

    @property
    def task_id(self) -> int:
        return self._task_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def initial_interval(self) -> timedelta:
        return self._initial_interval

    @property
    def regular_interval(self) -> timedelta:
        return self._regular_interval

    @property
    def running(self) -> bool:
        return self._running

    @property
    def executing(self) -> bool:
        return self._executing

    @property
    def has_run_initial(self) -> bool:
        return self._has_run_initial

    def snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(
            task_id=self._task_id,
            name=self._name,
            running=self._running,
            executing=self._executing,
        )

    def __repr__(self) -> str:
        return (
            f"ScheduledTask(task_id={self._task_id}, name={self._name!r}, "
            f"running={self._running}, executing={self._executing})"
        )

    # ---- lifecycle ----

    def start(self) -> None:
        """
        Start the automatic loop. No-op if already running.

        Must be called from the event loop thread.
        """
        if self._running:
            return

        # Fails (RuntimeError) before any state changes if there is no running loop.
        loop = asyncio.get_running_loop()

        self._running = True
        self._has_run_initial = False

        self._log.log_message(
            f"{self._name} started with {describe_interval(self._initial_interval)} initial interval, "
            f"then {describe_interval(self._regular_interval)} regular interval"
        )

        self._loop_task = loop.create_task(self._run_loop(), name=f"worker-{self._task_id}")

    async def stop(self) -> None:
        """
        Stop the automatic loop. No-op if not running.

        Cancels the loop and waits up to stop_grace_seconds for it to exit.
        Manual executions are not affected.
        """
        if not self._running:
            return

        self._running = False
        task = self._loop_task

        if task is not None and not task.done():
            task.cancel()
            done, _ = await asyncio.wait({task}, timeout=self.stop_grace_seconds)
            if not done:
                # Best-effort: the body ignored cancellation. Drop the handle anyway;
                # the stale loop can no longer claim ownership (see _owns_loop).
                logger.warning(
                    "%s did not stop within %.1fs; releasing it anyway",
                    self._name,
                    self.stop_grace_seconds,
                )

        # start() may have run while we were waiting; only release our own loop.
        if self._loop_task is task:
            self._loop_task = None

        if not self._running:
            self._log.log_message(f"{self._name} stopped")

    def execute_manually(self) -> asyncio.Task[None]:
        """
        Run the work body once, right now, outside the automatic cycle.

        Returns the spawned asyncio task. stop() does not cancel it.
        Must be called from the event loop thread.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_manual(), name=f"worker-{self._task_id}-manual")
        self._manual_tasks.add(task)
        task.add_done_callback(self._manual_tasks.discard)
        return task

    # ---- internals ----

    def _owns_loop(self) -> bool:
        return self._running and asyncio.current_task() is self._loop_task

    async def _run_loop(self) -> None:
        try:
            while self._owns_loop():
                wait = self._regular_interval if self._has_run_initial else self._initial_interval

                try:
                    await asyncio.sleep(wait.total_seconds())
                except asyncio.CancelledError:
                    break

                if not self._owns_loop():
                    break

                await self._execute_cycle()

        except asyncio.CancelledError:
            # stop() cancelled the loop mid-cycle; _execute_cycle already logged it.
            logger.debug("%s loop cancelled", self._name)
        except Exception as e:
            self._log.log_message(f"{self._name} worker loop encountered error: {e}")
            logger.exception("%s worker loop crashed", self._name)
        finally:
            # Ended without stop(): mark the task stopped so start() works again.
            if self._owns_loop():
                self._running = False
                self._loop_task = None

    async def _execute_cycle(self) -> None:
        if not self._running:
            return

        if self._executing:
            self._log.log_message(f"{self._name} automatic execution skipped (already executing)")
            return

        self._executing = True

        was_initial_run = not self._has_run_initial
        if was_initial_run:
            self._log.log_message(f"{self._name} starting initial execution...")
            self._has_run_initial = True
        else:
            self._log.log_message(f"{self._name} starting execution...")

        started = time.monotonic()
        try:
            await self._work()
            elapsed = time.monotonic() - started
            self._log.log_message(f"{self._name} completed execution (took {elapsed:.1f}s)")
        except asyncio.CancelledError:
            self._log.log_message(f"{self._name} execution was cancelled")
            # Only a cancel aimed at this loop ends it; one raised by the body is just an outcome.
            if _cancel_requested():
                raise
        except Exception as e:
            self._log.log_message(f"{self._name} encountered error: {e}")
            logger.debug("%s work body failed", self._name, exc_info=True)
        finally:
            self._executing = False

            if was_initial_run and self._owns_loop():
                self._log.log_message(
                    f"{self._name} switching to regular {describe_interval(self._regular_interval)} interval"
                )

    async def _run_manual(self) -> None:
        if self._executing:
            self._log.log_message(f"{self._name} is already executing. Manual execution skipped.")
            return

        self._executing = True
        self._log.log_message(f"{self._name} starting manual execution...")

        started = time.monotonic()
        try:
            await self._work()
            elapsed = time.monotonic() - started
            self._log.log_message(f"{self._name} completed manual execution (took {elapsed:.1f}s)")
        except asyncio.CancelledError:
            self._log.log_message(f"{self._name} manual execution was cancelled")
            if _cancel_requested():
                raise
        except Exception as e:
            self._log.log_message(f"{self._name} encountered error during manual execution: {e}")
            logger.debug("%s manual work body failed", self._name, exc_info=True)
        finally:
            self._executing = False
