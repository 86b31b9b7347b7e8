"""Shared pytest fixtures and test helpers for checkinout tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from checkinout.domain.clock import UTC_MIN
from checkinout.domain.lifecycle import CheckStatus
from checkinout.domain.session import SessionRecord

FIXED_NOW = datetime(2025, 3, 14, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test; the CLI reconfigures it."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("checkinout")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
    structlog.reset_defaults()


@pytest.fixture
def now() -> datetime:
    """A pinned UTC "now" shared by the clock fixture."""
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock that always returns :func:`now`."""
    return lambda: now


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config override in the environment.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on CLI test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CHECKINOUT_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_checked_in(now: datetime, *, seconds_ago: float = 2) -> SessionRecord:
    """A fresh checked-in record, asserting success."""
    outcome = SessionRecord.create(
        now - timedelta(seconds=seconds_ago),
        UTC_MIN,
        CheckStatus.CHECKED_IN,
        clock=lambda: now,
    )
    assert outcome.ok, outcome.errors
    return outcome.ensure_success()


def make_checked_out(now: datetime) -> SessionRecord:
    """A checked-out record from 2s ago to 1s ago, asserting success."""
    outcome = SessionRecord.create(
        now - timedelta(seconds=2),
        now - timedelta(seconds=1),
        CheckStatus.CHECKED_OUT,
        previous_status=CheckStatus.CHECKED_IN,
        clock=lambda: now,
    )
    assert outcome.ok, outcome.errors
    return outcome.ensure_success()
