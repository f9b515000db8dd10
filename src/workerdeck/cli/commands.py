# src/workerdeck/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from rich.console import RenderableType

from ..connectors.console_ui import render_status_table, watch_status
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandResult = RenderableType  # plain str or any rich renderable
CommandHandler2 = Callable[[AppState, list[str]], CommandResult]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

# Extra time on top of the grace period before a blocking /stop gives up waiting.
_STOP_SLACK_SECONDS = 5.0
_CALL_TIMEOUT_SECONDS = 5.0


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /start, /run, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> CommandResult | None:
        """
        Handle a string like "/command args".
        Returns a reply (text or rich renderable) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Stop all workers and quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_position(args: list[str], count: int) -> int:
    """Parse a 1-based worker number into a 0-based index."""
    if not args:
        raise ValueError("missing worker number")
    try:
        pos = int(args[0])
    except ValueError:
        raise ValueError(f"not a number: {args[0]!r}") from None
    if pos < 1 or pos > count:
        raise ValueError(f"worker number must be 1..{count}")
    return pos - 1


def _stop_timeout(state: AppState) -> float:
    return state.settings.stop_grace_seconds + _STOP_SLACK_SECONDS


def cmd_help(state: AppState, args: list[str]) -> CommandResult:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> CommandResult:
    snaps = state.registry.snapshot()
    running = sum(1 for s in snaps if s.running)
    executing = sum(1 for s in snaps if s.executing)
    title = f"Workers ({running}/{len(snaps)} running, {executing} executing)"
    return render_status_table(snaps, title=title)


def cmd_start(state: AppState, args: list[str]) -> CommandResult:
    """
    /start     -> start every worker
    /start N   -> start worker N
    """
    reg = state.registry
    if not args:
        state.runtime.call(reg.start_all, timeout=_CALL_TIMEOUT_SECONDS)
        return ""

    try:
        idx = _parse_position(args, len(reg))
    except ValueError as e:
        return f"Usage: /start [N] ({e})."

    task = reg.get(idx)
    if task.running:
        return f"{task.name} is already running."
    state.runtime.call(reg.start, idx, timeout=_CALL_TIMEOUT_SECONDS)
    return ""


def cmd_stop(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> CommandResult:
    """
    /stop      -> stop every worker (blocks up to one grace period)
    /stop N    -> stop worker N
    """
    reg = state.registry
    if not args:
        if emit:
            emit(f"Stopping workers (up to {state.settings.stop_grace_seconds:g}s)...")
        state.runtime.run(reg.stop_all(), timeout=_stop_timeout(state))
        return ""

    try:
        idx = _parse_position(args, len(reg))
    except ValueError as e:
        return f"Usage: /stop [N] ({e})."

    task = reg.get(idx)
    if not task.running:
        return f"{task.name} is not running."
    state.runtime.run(reg.stop(idx), timeout=_stop_timeout(state))
    return ""


def cmd_run(state: AppState, args: list[str]) -> CommandResult:
    """/run N -> execute worker N right now (even if its loop is stopped)."""
    reg = state.registry
    try:
        idx = _parse_position(args, len(reg))
    except ValueError as e:
        return f"Usage: /run N ({e})."

    state.runtime.call(reg.trigger_manual, idx, timeout=_CALL_TIMEOUT_SECONDS)
    return ""


def cmd_watch(state: AppState, args: list[str]) -> CommandResult:
    """/watch [seconds] -> live status table (Ctrl+C to end early)."""
    seconds = 5.0
    if args:
        try:
            seconds = float(args[0])
        except ValueError:
            return "Usage: /watch [seconds]."
        if seconds <= 0:
            return "Usage: /watch [seconds] (must be > 0)."

    watch_status(
        state.registry.snapshot,
        seconds=seconds,
        interval=state.settings.status_poll_interval,
    )
    return ""


def cmd_log(state: AppState, args: list[str]) -> CommandResult:
    """/log [N] -> last N activity lines (default 20)."""
    limit = 20
    if args:
        try:
            limit = int(args[0])
        except ValueError:
            return "Usage: /log [N]."

    lines = state.sink.history(limit)
    if not lines:
        return "Log is empty."
    return "\n".join(lines)


def cmd_clear(state: AppState, args: list[str]) -> CommandResult:
    state.sink.clear()
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show every worker's loop/work state.", aliases=["st"])
registry.register("start", cmd_start, help_text="Start workers: /start | /start N.")
registry.register("stop", cmd_stop, help_text="Stop workers: /stop | /stop N.")
registry.register("run", cmd_run, help_text="Run worker N manually: /run N.", aliases=["r"])
registry.register("watch", cmd_watch, help_text="Live status table: /watch [seconds].", aliases=["w"])
registry.register("log", cmd_log, help_text="Show recent activity: /log [N].")
registry.register("clear", cmd_clear, help_text="Clear the activity log.")
