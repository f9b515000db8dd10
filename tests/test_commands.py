# tests/test_commands.py

from __future__ import annotations

import time

from rich.table import Table

from workerdeck.cli.commands import CommandRegistry, registry


def _wait(predicate, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        assert time.monotonic() < deadline, "condition not reached in time"
        time.sleep(0.01)


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Empty command" in (reg.handle(state, "/") or "")
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help")
    assert isinstance(text, str)
    for name in ("/status", "/start", "/stop", "/run", "/watch", "/log", "/clear", "/exit"):
        assert name in text


def test_status_renders_table_for_every_worker(state) -> None:
    table = registry.handle(state, "/status")
    assert isinstance(table, Table)
    assert table.row_count == 16
    assert "0/16 running" in str(table.title)


def test_start_and_stop_single_worker(state) -> None:
    assert registry.handle(state, "/start 5") == ""
    assert state.registry.get(4).running
    assert registry.handle(state, "/start 5") == "Text Status is already running."

    assert registry.handle(state, "/stop 5") == ""
    assert not state.registry.get(4).running
    assert registry.handle(state, "/stop 5") == "Text Status is not running."
    assert state.sink.history(1)[0].endswith("Text Status stopped")


def test_start_all_and_stop_all(state) -> None:
    registry.handle(state, "/start")
    assert all(s.running for s in state.registry.snapshot())

    notes: list[str] = []
    registry.handle(state, "/stop", emit=notes.append)
    assert not any(s.running for s in state.registry.snapshot())
    assert notes and notes[0].startswith("Stopping workers")
    assert state.sink.history(1)[0].endswith("All workers stopped.")


def test_bad_worker_numbers_give_usage(state) -> None:
    assert (registry.handle(state, "/run") or "").startswith("Usage: /run N")
    assert "1..16" in (registry.handle(state, "/run 17") or "")
    assert "not a number" in (registry.handle(state, "/stop x") or "")
    assert (registry.handle(state, "/watch soon") or "").startswith("Usage: /watch")


def test_run_triggers_manual_execution(state) -> None:
    assert registry.handle(state, "/run 9") == ""
    lines = state.sink.history()
    assert any(line.endswith("Manual execution triggered for Data Import") for line in lines)

    # Data Import takes 0.3-1.1s.
    _wait(lambda: any("Data Import completed manual execution" in line for line in state.sink.history()))
    assert not state.registry.get(8).executing


def test_log_and_clear(state) -> None:
    assert registry.handle(state, "/log") == "Log is empty."

    state.sink.log_message("one")
    state.sink.log_message("two")
    out = registry.handle(state, "/log 1")
    assert isinstance(out, str)
    assert out.endswith("two")

    assert registry.handle(state, "/clear") == ""
    assert len(state.sink.history()) == 1
    assert state.sink.history()[0].endswith("Log cleared.")


def test_watch_polls_status(state, monkeypatch) -> None:
    import workerdeck.cli.commands as commands

    seen: dict[str, float] = {}

    def fake_watch(poll, *, seconds, interval):
        seen["seconds"] = seconds
        seen["interval"] = interval
        assert len(poll()) == 16
        return 1

    monkeypatch.setattr(commands, "watch_status", fake_watch)
    assert registry.handle(state, "/watch 0.5") == ""
    assert seen == {"seconds": 0.5, "interval": state.settings.status_poll_interval}
