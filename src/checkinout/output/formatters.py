"""Rich/JSON output helpers.

The CLI renders outcomes for humans (Rich output) or machines (--json).
The formatter layer adapts an outcome to the requested output mode.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from checkinout.output.renderers import render_outcome, render_quiet

if TYPE_CHECKING:
    from checkinout.domain.outcome import Outcome, UnitOutcome


class OutputSettings(BaseModel):
    """Output mode flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    width: int | None = None


def outcome_payload(
    outcome: Outcome[Any] | UnitOutcome, *, label: str | None = None
) -> dict[str, Any]:
    """JSON-ready dict of an outcome, with the operation label first when given."""
    payload = outcome.model_dump(mode="json")
    if label:
        payload = {"op": label, **payload}
    return payload


def format_outcome(
    outcome: Outcome[Any] | UnitOutcome,
    *,
    settings: OutputSettings | None = None,
    label: str | None = None,
) -> str:
    """Format an outcome for display.

    Args:
        outcome: The outcome to format.
        settings: Output mode; defaults to human-readable Rich output.
        label: Operation name shown next to the status line.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return _json.dumps(outcome_payload(outcome, label=label), indent=2)
    if settings.quiet:
        return render_quiet(outcome)
    return render_outcome(outcome, label=label, width=settings.width)
