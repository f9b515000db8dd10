# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from workerdeck.config import Settings


def test_defaults(monkeypatch) -> None:
    for key in (
        "WORKERDECK_APP_NAME",
        "WORKERDECK_AUTOSTART",
        "WORKERDECK_STOP_GRACE_SECONDS",
        "WORKERDECK_STATUS_POLL_INTERVAL",
        "WORKERDECK_LOG_HISTORY_SIZE",
        "WORKERDECK_ECHO_LOG",
        "WORKERDECK_DATA_DIR",
    ):
        monkeypatch.delenv(key, raising=False)

    s = Settings.from_env()
    assert s.app_name == "workerdeck"
    assert s.autostart is True
    assert s.stop_grace_seconds == 5.0
    assert s.status_poll_interval == 0.1
    assert s.log_history_size == 500
    assert s.echo_log is True
    assert s.data_dir == Path(".local/workerdeck")


def test_env_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("WORKERDECK_APP_NAME", "deck")
    monkeypatch.setenv("WORKERDECK_AUTOSTART", "no")
    monkeypatch.setenv("WORKERDECK_STOP_GRACE_SECONDS", "1.5")
    monkeypatch.setenv("WORKERDECK_LOG_HISTORY_SIZE", "42")
    monkeypatch.setenv("WORKERDECK_ECHO_LOG", "off")
    monkeypatch.setenv("WORKERDECK_DATA_DIR", str(tmp_path))

    s = Settings.from_env()
    assert s.app_name == "deck"
    assert s.autostart is False
    assert s.stop_grace_seconds == 1.5
    assert s.log_history_size == 42
    assert s.echo_log is False
    assert s.data_dir == tmp_path


def test_bad_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("WORKERDECK_STOP_GRACE_SECONDS", "soon")
    monkeypatch.setenv("WORKERDECK_LOG_HISTORY_SIZE", "lots")
    monkeypatch.setenv("WORKERDECK_STATUS_POLL_INTERVAL", "-3")

    s = Settings.from_env()
    assert s.stop_grace_seconds == 5.0
    assert s.log_history_size == 500
    assert s.status_poll_interval == 0.02
