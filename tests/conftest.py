"""Shared pytest fixtures for duo_cli tests."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path

import pytest

from duo_cli.logging import EventLogger, create_event_logger
from duo_cli.settings import ENV_PREFIX

from fake_engine import FakeEngine


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run every test from an empty directory with no DUO_* / GH_TOKEN / netrc leakage."""

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    FakeEngine.reset()
    return workdir


@pytest.fixture
def workdir(_isolate_environment: Path) -> Path:
    return _isolate_environment


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_logger(log_stream: io.StringIO):
    created: list[EventLogger] = []

    def factory(*, quiet: bool = False, log_format: str = "text") -> EventLogger:
        event_logger = create_event_logger(
            quiet=quiet,
            log_format=log_format,
            log_level=logging.INFO,
            stream=log_stream,
            name=f"duo_cli.test.{len(created)}",
        )
        created.append(event_logger)
        return event_logger

    yield factory
    for event_logger in created:
        event_logger.close()
