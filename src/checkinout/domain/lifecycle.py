"""Check-in/check-out status, transition map, and validation codes.

The session lifecycle is a closed loop::

    none -> checked_in -> checked_out -> none

No other move exists: no self-transitions, no skipping a step, no going
backwards. Every rule the session record enforces maps to exactly one
:class:`LifecycleCode`, so callers can branch on the cause of a failure.
"""

from __future__ import annotations

from enum import StrEnum

from checkinout.domain.errors import ErrorDetail


class CheckStatus(StrEnum):
    """Machine status of a session record."""

    NONE = "none"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


# --- Transition map ---

SESSION_TRANSITIONS: dict[str, list[str]] = {
    "none": ["checked_in"],
    "checked_in": ["checked_out"],
    "checked_out": ["none"],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = SESSION_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


# --- Validation codes ---


class LifecycleCode(StrEnum):
    """Stable machine-readable codes, one per validation rule."""

    NON_UTC_DATETIME = "NonUtcDateTime"
    INVALID_NONE_STATE = "InvalidNoneState"
    FUTURE_CHECK_IN_TOO_FAR = "FutureCheckInTooFar"
    PAST_CHECK_IN_NOT_ALLOWED = "PastCheckInNotAllowed"
    CHECK_IN_REQUIRED_BEFORE_CHECK_OUT = "CheckInRequiredBeforeCheckOut"
    INVALID_DATE_RANGE = "InvalidDateRange"
    INVALID_STATUS_TRANSITION = "InvalidStatusTransition"
    STALE_CHECK_IN = "StaleCheckIn"
    INVALID_STATUS = "InvalidStatus"
    FUTURE_CHECK_OUT_TOO_FAR = "FutureCheckOutTooFar"
    CHECK_IN_AFTER_CHECK_OUT = "CheckInAfterCheckOut"
    CHECK_OUT_WITHOUT_CHECK_IN = "CheckOutWithoutCheckIn"
    INVALID_CHECK_IN_STATE = "InvalidCheckInState"
    INVALID_CHECK_OUT_STATE = "InvalidCheckOutState"


LIFECYCLE_MESSAGES: dict[LifecycleCode, str] = {
    LifecycleCode.NON_UTC_DATETIME: "All timestamps must be in UTC format",
    LifecycleCode.INVALID_NONE_STATE: (
        "None status requires minimum datetime values for both check-in and check-out"
    ),
    LifecycleCode.FUTURE_CHECK_IN_TOO_FAR: "Check-in time cannot be more than 1 year in the future",
    LifecycleCode.PAST_CHECK_IN_NOT_ALLOWED: (
        "Check-in time cannot be more than 5 seconds in the past for new entries"
    ),
    LifecycleCode.CHECK_IN_REQUIRED_BEFORE_CHECK_OUT: "Check-in must be completed before check-out",
    LifecycleCode.INVALID_DATE_RANGE: "Check-out time must be after check-in time",
    LifecycleCode.INVALID_STATUS_TRANSITION: "Invalid status transition attempted",
    LifecycleCode.STALE_CHECK_IN: "Check-in timestamp is too old to complete check-out",
    LifecycleCode.INVALID_STATUS: "Invalid check-in/out status provided",
    LifecycleCode.FUTURE_CHECK_OUT_TOO_FAR: (
        "Check-out time cannot be more than 1 year in the future"
    ),
    LifecycleCode.CHECK_IN_AFTER_CHECK_OUT: "Check-in cannot occur after check-out",
    LifecycleCode.CHECK_OUT_WITHOUT_CHECK_IN: "Check-out cannot occur without a prior check-in",
    LifecycleCode.INVALID_CHECK_IN_STATE: (
        "CheckedIn status requires the check-out time to be the minimum value"
    ),
    LifecycleCode.INVALID_CHECK_OUT_STATE: (
        "CheckedOut status requires valid check-in and check-out times"
    ),
}


def lifecycle_error(code: LifecycleCode, message: str | None = None) -> ErrorDetail:
    """Build the :class:`ErrorDetail` for *code*, with its fixed message by default."""
    return ErrorDetail(code=str(code), message=message or LIFECYCLE_MESSAGES[code])
