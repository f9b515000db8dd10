# src/workerdeck/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (workers + background event loop), optionally
starts every worker, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _install_signal_handlers(handler) -> None:
    for name in ("SIGINT", "SIGTERM"):
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        try:
            signal.signal(signum, handler)
        except (ValueError, OSError):
            # Not on the main thread.
            pass


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        # Unblock input() in the REPL.
        raise KeyboardInterrupt

    _install_signal_handlers(_handle_signal)

    try:
        if settings.autostart:
            state.runtime.call(state.registry.start_all, timeout=5.0)

        if sys.stdin.isatty():
            run_console_loop(state)
        else:
            logger.info("No interactive console. Workers run until SIGTERM / Ctrl+C.")
            try:
                stop_main.wait()
            except KeyboardInterrupt:
                pass

    finally:
        # A second Ctrl+C must not cut the worker shutdown short.
        _install_signal_handlers(signal.SIG_IGN)
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
