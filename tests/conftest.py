# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from workerdeck.cli.bootstrap import create_initial_state, shutdown_state
from workerdeck.config import Settings
from workerdeck.core.state import AppState

from .fakes import RecordingLogSink


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built directly (not from env) so tests stay isolated and deterministic.
    """
    return Settings(
        app_name="workerdeck-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        autostart=False,
        stop_grace_seconds=0.5,
        status_poll_interval=0.02,
        log_history_size=100,
        echo_log=False,
    )


@pytest.fixture()
def sink() -> RecordingLogSink:
    return RecordingLogSink()


@pytest.fixture()
def state(settings: Settings):
    """
    Real AppState: default roster, console sink (echo off), background loop running.

    Workers are stopped and the loop is torn down after the test.
    """
    st: AppState = create_initial_state(settings=settings)
    try:
        yield st
    finally:
        shutdown_state(st)
