"""SessionRecord: the immutable check-in/check-out value object.

Validation lives on the model in two layers:

- A model validator enforces the time-independent shape of every record
  (UTC-tagged timestamps, sentinel placement per status, ordering). It runs
  on every construction path, so a malformed record cannot exist.
- ``create()`` enforces the rules that depend on the current time and on
  the previous status, and reports them as a failed
  :class:`~checkinout.domain.outcome.Outcome` instead of raising.

``transition_to()`` and ``update()`` never mutate the receiver; both go
through ``create()`` and return a new record or a failure.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from pydantic import BaseModel, Field, field_validator, model_validator

from checkinout.domain.clock import (
    UTC_MIN,
    Clock,
    add_years,
    is_utc,
    subtract_clamped,
    utc_now,
)
from checkinout.domain.errors import ErrorCategory
from checkinout.domain.lifecycle import (
    CheckStatus,
    LifecycleCode,
    is_valid_transition,
    lifecycle_error,
)
from checkinout.domain.outcome import Outcome

# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

MAX_FRESHNESS = timedelta(days=365)
MAX_FUTURE_LIMIT_YEARS = 100


class LifecyclePolicy(BaseModel):
    """Timing windows applied by :meth:`SessionRecord.create`.

    Attributes:
        freshness: How far in the past a new check-in may lie, and how old
            a check-in may be when it is checked out.
        future_limit_years: How many calendar years ahead a check-in may be
            scheduled.
    """

    model_config = {"frozen": True}

    freshness: timedelta = timedelta(seconds=5)
    future_limit_years: int = Field(default=1, ge=1, le=MAX_FUTURE_LIMIT_YEARS)

    @field_validator("freshness")
    @classmethod
    def _bounded_freshness(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("freshness must be positive")
        if value > MAX_FRESHNESS:
            raise ValueError(f"freshness cannot exceed {MAX_FRESHNESS.days} days")
        return value


DEFAULT_POLICY = LifecyclePolicy()


def _failure(code: LifecycleCode, policy: LifecyclePolicy) -> Outcome[SessionRecord]:
    message = None
    seconds = f"{policy.freshness.total_seconds():g}"
    years = policy.future_limit_years
    if code is LifecycleCode.PAST_CHECK_IN_NOT_ALLOWED:
        message = f"Check-in time cannot be more than {seconds} seconds in the past for new entries"
    elif code is LifecycleCode.FUTURE_CHECK_IN_TOO_FAR:
        unit = "year" if years == 1 else "years"
        message = f"Check-in time cannot be more than {years} {unit} in the future"
    return Outcome.failure(ErrorCategory.VALIDATION, lifecycle_error(code, message))


# ---------------------------------------------------------------------------
# Status rules (fail-fast, evaluated in order)
# ---------------------------------------------------------------------------


def _checked_in_problem(
    check_in: datetime,
    check_out: datetime,
    previous: CheckStatus | None,
    now: datetime,
    policy: LifecyclePolicy,
) -> LifecycleCode | None:
    if check_out != UTC_MIN:
        return LifecycleCode.INVALID_CHECK_IN_STATE
    if check_in > add_years(now, policy.future_limit_years):
        return LifecycleCode.FUTURE_CHECK_IN_TOO_FAR
    # Only fresh entries are bounded in the past; re-validation is not.
    if previous is None and check_in < subtract_clamped(now, policy.freshness):
        return LifecycleCode.PAST_CHECK_IN_NOT_ALLOWED
    return None


def _checked_out_problem(
    check_in: datetime,
    check_out: datetime,
    previous: CheckStatus | None,
    now: datetime,
    policy: LifecyclePolicy,
) -> LifecycleCode | None:
    if previous is not CheckStatus.CHECKED_IN:
        return LifecycleCode.CHECK_IN_REQUIRED_BEFORE_CHECK_OUT
    if check_out <= check_in:
        return LifecycleCode.INVALID_DATE_RANGE
    if check_in > now:
        return LifecycleCode.INVALID_STATUS_TRANSITION
    if check_in < subtract_clamped(now, policy.freshness):
        return LifecycleCode.STALE_CHECK_IN
    return None


def _none_problem(
    check_in: datetime,
    check_out: datetime,
    previous: CheckStatus | None,
    now: datetime,
    policy: LifecyclePolicy,
) -> LifecycleCode | None:
    if check_in != UTC_MIN or check_out != UTC_MIN:
        return LifecycleCode.INVALID_NONE_STATE
    return None


_STATUS_RULES: dict[CheckStatus, Callable[..., LifecycleCode | None]] = {
    CheckStatus.CHECKED_IN: _checked_in_problem,
    CheckStatus.CHECKED_OUT: _checked_out_problem,
    CheckStatus.NONE: _none_problem,
}


def _as_status(value: CheckStatus | str | None) -> CheckStatus | None:
    """Coerce *value* to a status; raises ``ValueError`` for unknown values."""
    if value is None:
        return None
    return CheckStatus(value)


# ---------------------------------------------------------------------------
# Session record
# ---------------------------------------------------------------------------

_empty: SessionRecord | None = None
_empty_lock = threading.Lock()

_TIME_FORMAT = "%Y-%m-%d %H:%M:%SZ"


class SessionRecord(BaseModel):
    """One check-in/check-out session.

    Records compare by value: two records with the same timestamps and
    status are equal however they were built.

    Attributes:
        check_in: UTC check-in time, or :data:`UTC_MIN` when not checked in.
        check_out: UTC check-out time, or :data:`UTC_MIN` when not checked out.
        status: Current lifecycle status.
    """

    model_config = {"frozen": True}

    check_in: datetime
    check_out: datetime
    status: CheckStatus

    @model_validator(mode="after")
    def _check_shape(self) -> SessionRecord:
        if not (is_utc(self.check_in) and is_utc(self.check_out)):
            raise ValueError("check_in and check_out must be UTC-tagged")
        if self.status is CheckStatus.NONE and (
            self.check_in != UTC_MIN or self.check_out != UTC_MIN
        ):
            raise ValueError("status none requires both timestamps at the minimum value")
        if self.status is CheckStatus.CHECKED_IN and self.check_out != UTC_MIN:
            raise ValueError("status checked_in requires check_out at the minimum value")
        if self.status is CheckStatus.CHECKED_OUT and self.check_out <= self.check_in:
            raise ValueError("status checked_out requires check_out after check_in")
        return self

    # --- Construction ---

    @classmethod
    def empty(cls) -> SessionRecord:
        """The shared ``none`` record, built once on first use."""
        global _empty
        if _empty is None:
            with _empty_lock:
                if _empty is None:
                    _empty = cls(check_in=UTC_MIN, check_out=UTC_MIN, status=CheckStatus.NONE)
        return _empty

    @classmethod
    def create(
        cls,
        check_in: datetime,
        check_out: datetime,
        status: CheckStatus | str,
        previous_status: CheckStatus | str | None = None,
        *,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
    ) -> Outcome[SessionRecord]:
        """Validate the inputs and build a record.

        Checks run in order and stop at the first failure:

        1. Both timestamps are UTC-tagged (``NonUtcDateTime``).
        2. The rules for *status* hold, given *previous_status* and the
           current time. ``previous_status=None`` marks a fresh entry rather
           than a transition.

        Every failure has category ``VALIDATION`` and a single error.
        """
        policy = policy or DEFAULT_POLICY
        if not (is_utc(check_in) and is_utc(check_out)):
            return _failure(LifecycleCode.NON_UTC_DATETIME, policy)
        try:
            target = CheckStatus(status)
            previous = _as_status(previous_status)
        except ValueError:
            return _failure(LifecycleCode.INVALID_STATUS, policy)

        now = (clock or utc_now)()
        problem = _STATUS_RULES[target](check_in, check_out, previous, now, policy)
        if problem is not None:
            return _failure(problem, policy)
        return Outcome.success(cls(check_in=check_in, check_out=check_out, status=target))

    # --- Transitions ---

    def transition_to(
        self,
        new_status: CheckStatus | str,
        timestamp: datetime,
        *,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
    ) -> Outcome[SessionRecord]:
        """Move to *new_status* at *timestamp*.

        Only ``none -> checked_in``, ``checked_in -> checked_out`` and
        ``checked_out -> none`` exist; every other pair fails with
        ``InvalidStatusTransition``.
        """
        try:
            target = CheckStatus(new_status)
        except ValueError:
            return _failure(LifecycleCode.INVALID_STATUS_TRANSITION, policy or DEFAULT_POLICY)

        if not is_valid_transition(self.status, target):
            return _failure(LifecycleCode.INVALID_STATUS_TRANSITION, policy or DEFAULT_POLICY)
        return _STEPS[target](self, timestamp, clock, policy)

    def _begin(
        self, timestamp: datetime, clock: Clock | None, policy: LifecyclePolicy | None
    ) -> Outcome[SessionRecord]:
        return SessionRecord.create(
            timestamp, UTC_MIN, CheckStatus.CHECKED_IN, clock=clock, policy=policy
        )

    def _finish(
        self, timestamp: datetime, clock: Clock | None, policy: LifecyclePolicy | None
    ) -> Outcome[SessionRecord]:
        return SessionRecord.create(
            self.check_in,
            timestamp,
            CheckStatus.CHECKED_OUT,
            previous_status=self.status,
            clock=clock,
            policy=policy,
        )

    def _reset(
        self, timestamp: datetime, clock: Clock | None, policy: LifecyclePolicy | None
    ) -> Outcome[SessionRecord]:
        return SessionRecord.create(UTC_MIN, UTC_MIN, CheckStatus.NONE, clock=clock, policy=policy)

    def update(
        self,
        check_in: datetime,
        check_out: datetime,
        status: CheckStatus | str,
        *,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
    ) -> Outcome[SessionRecord]:
        """Re-validate new field values against the current status.

        Calls :meth:`create` with the receiver's status as the previous
        status. A ``checked_out`` record can only have come from
        ``checked_in``, so re-validating it as ``checked_out`` uses that.
        The receiver is left untouched.
        """
        previous = self.status
        if previous is CheckStatus.CHECKED_OUT and status == CheckStatus.CHECKED_OUT:
            previous = CheckStatus.CHECKED_IN
        return SessionRecord.create(
            check_in, check_out, status, previous_status=previous, clock=clock, policy=policy
        )

    # --- Queries ---

    @property
    def is_empty(self) -> bool:
        return self == SessionRecord.empty()

    def duration(self) -> timedelta:
        """Elapsed time between check-in and check-out; zero unless checked out."""
        if self.status is CheckStatus.CHECKED_OUT:
            return self.check_out - self.check_in
        return timedelta(0)

    def is_active(self, *, clock: Clock | None = None) -> bool:
        """True iff checked in, with a real check-in time that is not in the future."""
        if self.status is not CheckStatus.CHECKED_IN:
            return False
        now = (clock or utc_now)()
        return UTC_MIN < self.check_in <= now

    def __str__(self) -> str:
        if self.status is CheckStatus.NONE:
            return "Not checked in"
        if self.status is CheckStatus.CHECKED_IN:
            return f"Checked in at {self.check_in:{_TIME_FORMAT}}"
        if self.status is CheckStatus.CHECKED_OUT:
            return (
                f"Checked in at {self.check_in:{_TIME_FORMAT}}, "
                f"checked out at {self.check_out:{_TIME_FORMAT}} "
                f"(duration {self.duration()})"
            )
        return "Invalid check-in/out state"


# Keyed by target status; which pairs are legal lives in SESSION_TRANSITIONS.
_STEPS: dict[
    CheckStatus,
    Callable[
        [SessionRecord, datetime, Clock | None, LifecyclePolicy | None],
        Outcome[SessionRecord],
    ],
] = {
    CheckStatus.CHECKED_IN: SessionRecord._begin,
    CheckStatus.CHECKED_OUT: SessionRecord._finish,
    CheckStatus.NONE: SessionRecord._reset,
}
