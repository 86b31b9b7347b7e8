"""Command: validate and build one session record."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from checkinout.commands._base import CheckinCommand
from checkinout.commands._params import STATUS_CHOICE, TimestampParam
from checkinout.domain.clock import UTC_MIN

if TYPE_CHECKING:
    from checkinout.commands._context import AppContext


@click.command(
    cls=CheckinCommand,
    examples="""\
  checkinout create --check-in now --status checked_in
  checkinout create --check-in now-2s --check-out now --status checked_out --previous checked_in
  checkinout create --check-in 2024-05-01T09:00:00 --status checked_in
  checkinout --json create --check-in min --check-out min --status none""",
)
@click.option("--check-in", "check_in", type=TimestampParam(), required=True, help="Check-in time.")
@click.option(
    "--check-out",
    "check_out",
    type=TimestampParam(),
    default=None,
    help="Check-out time (default: unset).",
)
@click.option("--status", type=STATUS_CHOICE, required=True, help="Status of the record.")
@click.option(
    "--previous",
    type=STATUS_CHOICE,
    default=None,
    help="Status the record transitions from (omit for a fresh entry).",
)
@click.pass_obj
def create(
    app: AppContext,
    check_in: datetime,
    check_out: datetime | None,
    status: str,
    previous: str | None,
) -> None:
    """Validate a check-in/check-out record and print it."""
    from checkinout.domain.session import SessionRecord

    outcome = SessionRecord.create(
        check_in,
        check_out if check_out is not None else UTC_MIN,
        status,
        previous_status=previous,
        policy=app.policy,
    )
    app.emit(outcome, label="create")
