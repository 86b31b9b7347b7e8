"""Command: apply one lifecycle transition to a record."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from checkinout.commands._base import CheckinCommand
from checkinout.commands._params import STATUS_CHOICE, TimestampParam
from checkinout.domain.clock import UTC_MIN
from checkinout.domain.lifecycle import CheckStatus

if TYPE_CHECKING:
    from checkinout.commands._context import AppContext

# Status each starting state is reached from, so the start record validates
# as a transition rather than a fresh entry.
_REACHED_FROM: dict[str, str | None] = {
    "none": None,
    "checked_in": "none",
    "checked_out": "checked_in",
}


@click.command(
    cls=CheckinCommand,
    examples="""\
  checkinout transition --from none --to checked_in --at now
  checkinout transition --from checked_in --check-in now-2s --to checked_out
  checkinout transition --from checked_out --check-in now-3s --check-out now-1s --to none""",
)
@click.option("--from", "from_status", type=STATUS_CHOICE, required=True, help="Starting status.")
@click.option(
    "--check-in",
    "check_in",
    type=TimestampParam(),
    default=None,
    help="Check-in time of the starting record (default: unset).",
)
@click.option(
    "--check-out",
    "check_out",
    type=TimestampParam(),
    default=None,
    help="Check-out time of the starting record (default: unset).",
)
@click.option("--to", "to_status", type=STATUS_CHOICE, required=True, help="Target status.")
@click.option("--at", type=TimestampParam(), default="now", help="Transition time (default: now).")
@click.pass_obj
def transition(
    app: AppContext,
    from_status: str,
    check_in: datetime | None,
    check_out: datetime | None,
    to_status: str,
    at: datetime,
) -> None:
    """Build a starting record and move it to another status."""
    from checkinout.domain.session import SessionRecord

    policy = app.policy
    if from_status == CheckStatus.NONE:
        start = SessionRecord.create(UTC_MIN, UTC_MIN, CheckStatus.NONE, policy=policy)
    else:
        start = SessionRecord.create(
            check_in if check_in is not None else UTC_MIN,
            check_out if check_out is not None else UTC_MIN,
            from_status,
            previous_status=_REACHED_FROM[from_status],
            policy=policy,
        )
    outcome = start.bind(lambda record: record.transition_to(to_status, at, policy=policy))
    app.emit(outcome, label="transition")
