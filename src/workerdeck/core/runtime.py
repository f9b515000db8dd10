# src/workerdeck/core/runtime.py

"""
Background event loop for the scheduler.

The console REPL is blocking (input()), while the workers are asyncio tasks that
want a loop running all the time. So the loop lives in its own thread and the
console talks to it through run_coroutine_threadsafe.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _cancel_pending() -> None:
    current = asyncio.current_task()
    pending = [t for t in asyncio.all_tasks() if t is not current]
    for t in pending:
        t.cancel()
    if pending:
        logger.info("Cancelling %d pending task(s) on shutdown.", len(pending))
        await asyncio.gather(*pending, return_exceptions=True)


class BackgroundLoop:
    def __init__(self, *, name: str = "workerdeck-loop") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise RuntimeError("background loop is not started")
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, *, timeout: float = 5.0) -> None:
        if self.is_running:
            return

        self._ready.clear()
        t = threading.Thread(target=self._runner, name=self._name, daemon=True)
        self._thread = t
        t.start()

        if not self._ready.wait(timeout=timeout):
            raise RuntimeError("background loop thread did not initialize in time")
        logger.info("Background loop started (%s).", self._name)

    def _runner(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        loop.call_soon(self._ready.set)

        try:
            loop.run_forever()
        finally:
            # Whatever is still in flight (manual executions, stragglers) gets cancelled.
            try:
                loop.run_until_complete(_cancel_pending())
                loop.run_until_complete(loop.shutdown_asyncgens())
            except Exception:
                logger.exception("Error while draining the background loop.")
            finally:
                loop.close()
                logger.info("Background loop stopped (%s).", self._name)

    def submit(self, coro: Coroutine[Any, Any, T]) -> concurrent.futures.Future[T]:
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def run(self, coro: Coroutine[Any, Any, T], *, timeout: float | None = None) -> T:
        """Run `coro` on the loop and block the calling thread until it finishes."""
        return self.submit(coro).result(timeout=timeout)

    def call(self, fn: Callable[..., T], *args: Any, timeout: float | None = None) -> T:
        """Run a plain callable on the loop thread (e.g. ScheduledTask.start) and return its result."""
        fut: concurrent.futures.Future[T] = concurrent.futures.Future()

        def _invoke() -> None:
            if not fut.set_running_or_notify_cancel():
                return
            try:
                fut.set_result(fn(*args))
            except Exception as e:
                fut.set_exception(e)

        self.loop.call_soon_threadsafe(_invoke)
        return fut.result(timeout=timeout)

    def stop(self, *, timeout: float = 10.0) -> None:
        if not self.is_running:
            return

        with contextlib.suppress(RuntimeError):
            self.loop.call_soon_threadsafe(self.loop.stop)

        assert self._thread is not None
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Background loop thread did not exit within %.1fs.", timeout)
