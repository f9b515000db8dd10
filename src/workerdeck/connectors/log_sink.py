# src/workerdeck/connectors/log_sink.py

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime

from rich.console import Console

from ..logging_setup import ACTIVITY_LOGGER
from .console_ui import get_console

activity_logger = logging.getLogger(ACTIVITY_LOGGER)


def _ts_local() -> str:
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


class ConsoleLogSink:
    """
    LogSink for the console front-end.

    - stamps each message with local HH:MM:SS.fff
    - keeps a bounded history for /log (cleared by /clear)
    - optionally echoes lines to the terminal as they happen
    - mirrors every message to the 'workerdeck.activity' logger (lands in the log file)

    Called from the scheduler's event loop thread and from the console thread.
    """

    def __init__(
        self,
        *,
        history_size: int = 500,
        echo: bool = True,
        console: Console | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._history: deque[str] = deque(maxlen=max(1, int(history_size)))
        self.echo = echo
        self._console = console

    def log_message(self, text: str) -> None:
        line = f"[{_ts_local()}] {text}"
        with self._lock:
            self._history.append(line)

        activity_logger.info("%s", text)

        if self.echo:
            console = self._console if self._console is not None else get_console()
            # rich.Console serializes writes internally.
            console.print(line, markup=False, highlight=False)

    def history(self, limit: int | None = None) -> list[str]:
        with self._lock:
            lines = list(self._history)
        if limit is not None:
            lines = lines[-limit:] if limit > 0 else []
        return lines

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
        self.log_message("Log cleared.")
