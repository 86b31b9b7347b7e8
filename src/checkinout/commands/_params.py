"""Click parameter types for timestamps and statuses."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any

import click

from checkinout.domain.clock import UTC_MIN, Clock, utc_now
from checkinout.domain.lifecycle import CheckStatus

_RELATIVE = re.compile(r"^now(?:(?P<sign>[+-])(?P<amount>\d+)(?P<unit>[smhd]))?$")
_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}

STATUS_CHOICE = click.Choice([s.value for s in CheckStatus])


class TimestampParam(click.ParamType):
    """Timestamp argument.

    Accepts ISO 8601 (an offset-less value stays naive, so the domain
    rejects it as non-UTC), ``min`` for the unset sentinel, and ``now`` with
    an optional offset such as ``now-2s`` or ``now+1h``.
    """

    name = "timestamp"

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, datetime):
            return value
        text = str(value).strip()
        if text.lower() == "min":
            return UTC_MIN
        match = _RELATIVE.match(text.lower())
        if match:
            now = self._clock()
            if match.group("sign") is None:
                return now
            delta = timedelta(**{_UNITS[match.group("unit")]: int(match.group("amount"))})
            return now + delta if match.group("sign") == "+" else now - delta
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            msg = f"{text!r} is not an ISO 8601 timestamp, 'min', or 'now[+-]N[smhd]'"
            self.fail(msg, param, ctx)
