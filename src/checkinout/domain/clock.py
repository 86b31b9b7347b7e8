"""Wall-clock access and UTC helpers.

The session record reads "now" through a :data:`Clock` so tests and
callers can pin time. The default clock is :func:`utc_now`.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable
from datetime import MAXYEAR, MINYEAR, UTC, datetime, timedelta

Clock = Callable[[], datetime]

UTC_MIN = datetime.min.replace(tzinfo=UTC)
"""Epoch-minimum sentinel: "no timestamp" for a session record."""


def utc_now() -> datetime:
    """Current time, tagged with ``datetime.UTC``."""
    return datetime.now(UTC)


def is_utc(value: datetime) -> bool:
    """True iff *value* carries explicit UTC provenance.

    An aware datetime with a zero offset is not enough: ``Europe/London``
    in winter has offset zero but is not UTC-tagged.
    """
    if value.tzinfo is None:
        return False
    return value.utcoffset() == timedelta(0) and value.tzname() == "UTC"


def add_years(value: datetime, years: int) -> datetime:
    """Shift *value* by calendar years; Feb 29 lands on Feb 28 in non-leap years.

    A result past the representable range clamps to ``datetime.max`` (or
    ``datetime.min``) in the same timezone.
    """
    year = value.year + years
    if year > MAXYEAR:
        return datetime.max.replace(tzinfo=value.tzinfo)
    if year < MINYEAR:
        return datetime.min.replace(tzinfo=value.tzinfo)
    if value.month == 2 and value.day == 29 and not calendar.isleap(year):
        return value.replace(year=year, day=28)
    return value.replace(year=year)


def subtract_clamped(value: datetime, delta: timedelta) -> datetime:
    """``value - delta``, floored at ``datetime.min`` in the same timezone."""
    try:
        return value - delta
    except OverflowError:
        return datetime.min.replace(tzinfo=value.tzinfo)
