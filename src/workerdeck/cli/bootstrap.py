# src/workerdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the log sink, the roster and the background loop into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..connectors.log_sink import ConsoleLogSink
from ..core.runtime import BackgroundLoop
from ..core.state import AppState
from ..tasks.registry import TaskRegistry
from ..tasks.roster import build_tasks

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None, start_loop: bool = True) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    sink = ConsoleLogSink(history_size=settings.log_history_size, echo=settings.echo_log)
    tasks = build_tasks(sink, stop_grace_seconds=settings.stop_grace_seconds)
    registry = TaskRegistry(tasks, sink)

    runtime = BackgroundLoop()
    if start_loop:
        runtime.start()

    logger.info("Built %d workers.", len(registry))
    return AppState(settings=settings, sink=sink, registry=registry, runtime=runtime)


def shutdown_state(state: AppState) -> None:
    """Stop every worker (bounded) and tear the loop down. No exceptions escape."""
    if state.runtime.is_running:
        # Workers stop concurrently, so one grace period plus slack is enough.
        timeout = state.settings.stop_grace_seconds + 5.0
        try:
            state.runtime.run(state.registry.stop_all(), timeout=timeout)
        except Exception:
            logger.exception("Failed to stop workers cleanly.")

    try:
        state.runtime.stop()
    except Exception:
        logger.exception("Failed to stop the background loop.")
