"""SessionService: drives one in-memory session through its lifecycle.

The service holds the current :class:`SessionRecord` and replaces it only
when a transition succeeds; a failed outcome leaves it untouched.
Nothing is persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from checkinout.domain.clock import Clock, utc_now
from checkinout.domain.lifecycle import CheckStatus
from checkinout.domain.outcome import Outcome
from checkinout.domain.session import DEFAULT_POLICY, LifecyclePolicy, SessionRecord

if TYPE_CHECKING:
    from checkinout.config.settings import CheckinSettings

logger = structlog.get_logger(__name__)


class SessionService:
    """Check in, check out, and reset a single session.

    Usage::

        service = SessionService.from_settings(settings)
        outcome = service.check_in()
        if outcome.ok:
            service.check_out()
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
        record: SessionRecord | None = None,
    ) -> None:
        self._clock = clock or utc_now
        self._policy = policy or DEFAULT_POLICY
        self._record = record or SessionRecord.empty()

    @classmethod
    def from_settings(
        cls, settings: CheckinSettings, *, clock: Clock | None = None
    ) -> SessionService:
        return cls(clock=clock, policy=settings.lifecycle.to_policy())

    @property
    def current(self) -> SessionRecord:
        return self._record

    @property
    def policy(self) -> LifecyclePolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transition(
        self, status: CheckStatus | str, at: datetime | None = None
    ) -> Outcome[SessionRecord]:
        """Apply one transition at *at* (default: now from the service clock)."""
        timestamp = at if at is not None else self._clock()
        previous = self._record
        outcome = previous.transition_to(
            status, timestamp, clock=self._clock, policy=self._policy
        )
        if outcome.ok:
            self._record = outcome.ensure_success()
            logger.debug(
                "session transition",
                from_status=str(previous.status),
                to_status=str(status),
                record=self._record,
            )
        else:
            logger.info(
                "session transition rejected",
                from_status=str(previous.status),
                to_status=str(status),
                outcome=outcome,
            )
        return outcome

    def check_in(self, at: datetime | None = None) -> Outcome[SessionRecord]:
        return self.transition(CheckStatus.CHECKED_IN, at)

    def check_out(self, at: datetime | None = None) -> Outcome[SessionRecord]:
        return self.transition(CheckStatus.CHECKED_OUT, at)

    def reset(self) -> Outcome[SessionRecord]:
        """Return a checked-out session to ``none``."""
        return self.transition(CheckStatus.NONE)
