# src/workerdeck/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .runtime import BackgroundLoop

if TYPE_CHECKING:
    from ..config import Settings
    from ..connectors.log_sink import ConsoleLogSink
    from ..tasks.registry import TaskRegistry


@dataclass
class AppState:
    # Settings are kept on the state so command handlers don't re-read config.
    settings: Settings

    sink: ConsoleLogSink
    registry: TaskRegistry
    runtime: BackgroundLoop
