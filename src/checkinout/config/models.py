"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, checkinout.toml only contains
overrides. The lifecycle defaults are the business constants: a 5-second
freshness window and a 1-year future bound.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, Field

from checkinout.domain.session import (
    MAX_FRESHNESS,
    MAX_FUTURE_LIMIT_YEARS,
    LifecyclePolicy,
)

# --- checkinout.toml sections ---


class LifecycleConfig(BaseModel):
    """[lifecycle] section."""

    model_config = {"frozen": True}

    freshness_seconds: float = Field(default=5.0, gt=0, le=MAX_FRESHNESS.total_seconds())
    future_limit_years: int = Field(default=1, ge=1, le=MAX_FUTURE_LIMIT_YEARS)

    def to_policy(self) -> LifecyclePolicy:
        """Build the domain policy the session record validates against."""
        return LifecyclePolicy(
            freshness=timedelta(seconds=self.freshness_seconds),
            future_limit_years=self.future_limit_years,
        )


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = Field(default=120, ge=40)
