"""Rich renderers for outcomes and session records.

Each renderer writes to a Rich Console (backed by StringIO). The caller
gets plain text back; Rich drops styling when no terminal is attached,
which is the case inside Click's CliRunner and piped output.

Renderers only read ``ok``, ``value`` and ``errors`` from an outcome.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from checkinout.domain.clock import UTC_MIN
from checkinout.domain.session import SessionRecord
from checkinout.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from datetime import datetime

    from rich.console import Console

    from checkinout.domain.outcome import Outcome, UnitOutcome


# ── Public API ────────────────────────────────────────────────────────


def render_outcome(
    outcome: Outcome[Any] | UnitOutcome,
    *,
    label: str | None = None,
    width: int | None = None,
) -> str:
    """Render an outcome: ``OK`` plus the value, or ``ERROR`` plus every error."""
    console = create_console(width=width)
    if outcome.ok:
        _render_success(console, outcome, label=label)
    else:
        _render_errors(console, outcome, label=label)
    return get_output(console).rstrip("\n")


def render_quiet(outcome: Outcome[Any] | UnitOutcome) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if outcome.ok:
        return "OK"
    return f"ERROR: {', '.join(outcome.codes)}"


def render_heading(title: str, description: str, *, width: int | None = None) -> str:
    """Render a scenario heading for the demo walk-through."""
    console = create_console(width=width)
    console.print()
    console.print(Text(f"[SCENARIO] {title}", style="cio.category"))
    console.print(Text(description), soft_wrap=True)
    return get_output(console).rstrip("\n")


def format_timestamp(value: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SSZ``, or ``-`` for the unset sentinel."""
    if value == UTC_MIN:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%SZ")


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: str, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cio.key")
    console.print(k, Text(value, style=style), sep="", end="", soft_wrap=True)
    console.print()


def _render_record(console: Console, record: SessionRecord) -> None:
    status = str(record.status)
    _field(console, "status", status, style_for_status(status))
    _field(console, "check_in", format_timestamp(record.check_in), "cio.time")
    _field(console, "check_out", format_timestamp(record.check_out), "cio.time")
    _field(console, "duration", str(record.duration()))
    _field(console, "summary", str(record))


def _render_success(
    console: Console, outcome: Outcome[Any] | UnitOutcome, *, label: str | None
) -> None:
    console.print(Text("OK", style="cio.ok"), Text(f"  {label}" if label else ""), end="")
    console.print()
    value = getattr(outcome, "value", None)
    if isinstance(value, SessionRecord):
        _render_record(console, value)
    elif value is not None:
        _field(console, "value", str(value))


def _render_errors(
    console: Console, outcome: Outcome[Any] | UnitOutcome, *, label: str | None
) -> None:
    head = [Text("ERROR", style="cio.error")]
    if label:
        head.append(Text(f"  {label}"))
    head.append(Text(f"  [{outcome.category}]", style="cio.category"))
    console.print(*head, sep="", end="")
    console.print()
    for error in outcome.errors:
        console.print(
            Text("  - "),
            Text(error.code, style="cio.code"),
            Text(f": {error.message}"),
            sep="",
            soft_wrap=True,
        )
