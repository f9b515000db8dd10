# src/workerdeck/tasks/work.py

"""Simulated work bodies: sleep for a random duration drawn from a range."""

from __future__ import annotations

import asyncio
import random

from ..core.ports import WorkBody
from .task_models import DurationRange


def simulated_work(duration: DurationRange, *, rng: random.Random | None = None) -> WorkBody:
    """
    Build a work body that pretends to be busy for `duration` seconds.

    The sleep is the only suspension point, so cancellation is honored immediately.
    """

    async def _work() -> float:
        seconds = duration.sample(rng)
        await asyncio.sleep(seconds)
        return seconds

    return _work
