"""Command: walk through the check-in/check-out scenarios end to end.

Every scenario runs against one pinned "now", so the output is
reproducible within a run.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

import click

from checkinout.commands._base import CheckinCommand
from checkinout.domain.clock import UTC_MIN, utc_now
from checkinout.domain.lifecycle import CheckStatus
from checkinout.domain.outcome import Outcome
from checkinout.domain.session import LifecyclePolicy, SessionRecord
from checkinout.output.formatters import format_outcome, outcome_payload
from checkinout.output.renderers import render_heading
from checkinout.services.session import SessionService

if TYPE_CHECKING:
    from checkinout.commands._context import AppContext

Scenario = tuple[str, str, Callable[[datetime, LifecyclePolicy], Outcome[Any]]]


def _valid_check_in(now: datetime, policy: LifecyclePolicy) -> Outcome[SessionRecord]:
    return SessionRecord.create(
        now - timedelta(seconds=2),
        UTC_MIN,
        CheckStatus.CHECKED_IN,
        clock=lambda: now,
        policy=policy,
    )


def _non_utc_check_in(now: datetime, policy: LifecyclePolicy) -> Outcome[SessionRecord]:
    local = now.replace(tzinfo=None)
    return SessionRecord.create(
        local, now, CheckStatus.CHECKED_IN, clock=lambda: now, policy=policy
    )


def _check_in_then_out(now: datetime, policy: LifecyclePolicy) -> Outcome[timedelta]:
    service = SessionService(clock=lambda: now, policy=policy)
    checked_in = service.check_in(now - timedelta(seconds=2))
    checked_out = checked_in.bind(lambda _record: service.check_out(now))
    return checked_out.map(lambda r: r.duration())


def _stale_check_in(now: datetime, policy: LifecyclePolicy) -> Outcome[SessionRecord]:
    stale = now - policy.freshness - timedelta(seconds=1)
    checked_in = SessionRecord.create(
        stale, UTC_MIN, CheckStatus.CHECKED_IN, clock=lambda: now, policy=policy
    )
    return checked_in.bind(
        lambda r: r.transition_to(CheckStatus.CHECKED_OUT, now, clock=lambda: now, policy=policy)
    )


def _checked_out_to_checked_in(now: datetime, policy: LifecyclePolicy) -> Outcome[SessionRecord]:
    checked_out = SessionRecord.create(
        now - timedelta(seconds=2),
        now - timedelta(seconds=1),
        CheckStatus.CHECKED_OUT,
        previous_status=CheckStatus.CHECKED_IN,
        clock=lambda: now,
        policy=policy,
    )
    return checked_out.bind(
        lambda r: r.transition_to(CheckStatus.CHECKED_IN, now, clock=lambda: now, policy=policy)
    )


SCENARIOS: list[Scenario] = [
    (
        "Valid check-in",
        "Check-in 2 seconds ago, UTC, inside the freshness window. Expected: OK.",
        _valid_check_in,
    ),
    (
        "Non-UTC check-in",
        "Check-in given as a naive local time. Expected: NonUtcDateTime.",
        _non_utc_check_in,
    ),
    (
        "Check-in then check-out",
        "Check in 2 seconds ago, check out now. Expected: OK with a 2 second duration.",
        _check_in_then_out,
    ),
    (
        "Stale check-in",
        "Check-in older than the freshness window. Expected: PastCheckInNotAllowed.",
        _stale_check_in,
    ),
    (
        "Invalid transition",
        "Move a checked-out record straight back to checked in. "
        "Expected: InvalidStatusTransition.",
        _checked_out_to_checked_in,
    ),
]


def run_scenarios(
    now: datetime, policy: LifecyclePolicy
) -> list[tuple[str, str, Outcome[Any]]]:
    """Run every scenario at *now* and return ``(title, description, outcome)``."""
    return [(title, desc, run(now, policy)) for title, desc, run in SCENARIOS]


@click.command(
    cls=CheckinCommand,
    examples="""\
  checkinout demo
  checkinout --json demo
  checkinout -q demo""",
)
@click.pass_obj
def demo(app: AppContext) -> None:
    """Run the check-in/check-out walk-through scenarios."""
    results = run_scenarios(utc_now(), app.policy)
    settings = app.output_settings

    if settings.json_output:
        payload = [
            {"scenario": title, **outcome_payload(outcome)} for title, _desc, outcome in results
        ]
        click.echo(json.dumps(payload, indent=2))
        return

    for title, desc, outcome in results:
        if not settings.quiet:
            click.echo(render_heading(title, desc, width=settings.width))
        click.echo(format_outcome(outcome, settings=settings, label=title))
