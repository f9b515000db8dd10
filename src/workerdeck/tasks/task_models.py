# src/workerdeck/tasks/task_models.py

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True, frozen=True)
class TaskSnapshot:
    """Point-in-time view of one task, as shown by the status table."""

    task_id: int
    name: str
    running: bool
    executing: bool


@dataclass(slots=True, frozen=True)
class DurationRange:
    """How long one simulated run of a task takes, in seconds."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if self.low < 0 or self.high < self.low:
            raise ValueError(f"invalid duration range: {self.low}..{self.high}")

    def sample(self, rng: random.Random | None = None) -> float:
        r = rng or random
        return r.uniform(self.low, self.high)


@dataclass(slots=True, frozen=True)
class TaskSpec:
    task_id: int
    name: str
    initial_interval: timedelta
    regular_interval: timedelta
    work_duration: DurationRange
