# src/workerdeck/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from .console_ui import get_console

logger = logging.getLogger(__name__)

PROMPT = "workerdeck> "


def run_console_loop(state: AppState) -> None:
    """
    Blocking REPL on the main thread.

    Worker activity is printed by the log sink as it happens (from the loop thread);
    this loop only reads commands and prints their replies.
    """
    console = get_console()
    logger.info("Console connector started.")
    state.sink.log_message("Application initialized. Use '/start' to begin workers.")
    console.print("[info]Type /help for commands, /exit to quit.[/]")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (e.g. /stop waiting on workers)
        console.print(text, markup=False, highlight=False)

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            console.print("Commands start with '/'. Use /help to list them.", markup=False)
            continue

        if isinstance(cmd_response, str):
            if cmd_response:
                console.print(cmd_response, markup=False, highlight=False)
        else:
            console.print(cmd_response)

    logger.info("Console connector finished.")
