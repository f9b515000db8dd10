# tests/test_runtime.py

from __future__ import annotations

import asyncio
import threading

import pytest

from workerdeck.core.runtime import BackgroundLoop


@pytest.fixture()
def runtime():
    rt = BackgroundLoop(name="test-loop")
    rt.start()
    try:
        yield rt
    finally:
        rt.stop()


def test_run_returns_coroutine_result(runtime) -> None:
    async def add(a: int, b: int) -> int:
        await asyncio.sleep(0)
        return a + b

    assert runtime.run(add(2, 3), timeout=2.0) == 5


def test_call_runs_on_loop_thread(runtime) -> None:
    def where() -> str:
        asyncio.get_running_loop()  # would raise off-loop
        return threading.current_thread().name

    assert runtime.call(where, timeout=2.0) == "test-loop"


def test_call_propagates_errors(runtime) -> None:
    def boom() -> None:
        raise IndexError("nope")

    with pytest.raises(IndexError):
        runtime.call(boom, timeout=2.0)


def test_stop_cancels_pending_tasks() -> None:
    rt = BackgroundLoop(name="test-loop-2")
    rt.start()
    fut = rt.submit(asyncio.sleep(30))

    rt.stop(timeout=5.0)

    assert not rt.is_running
    assert fut.cancelled()


def test_start_and_stop_are_idempotent() -> None:
    rt = BackgroundLoop()
    rt.stop()
    rt.start()
    rt.start()
    assert rt.is_running
    rt.stop()
    rt.stop()
    assert not rt.is_running


def test_call_can_schedule_work_on_the_loop(runtime) -> None:
    async def tick() -> str:
        return "ticked"

    def spawn() -> asyncio.Task[str]:
        return asyncio.get_running_loop().create_task(tick())

    task = runtime.call(spawn, timeout=2.0)

    async def join() -> str:
        return await task

    assert runtime.run(join(), timeout=2.0) == "ticked"
