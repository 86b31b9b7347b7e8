"""Rich Console factory and theme for checkinout output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_outcome() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHECKINOUT_THEME = Theme(
    {
        "cio.ok": "bold green",
        "cio.error": "bold red",
        "cio.category": "bold yellow",
        "cio.code": "bold cyan",
        "cio.key": "dim",
        "cio.time": "bold blue",
        "cio.status.none": "dim",
        "cio.status.checked_in": "green",
        "cio.status.checked_out": "yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "none": "cio.status.none",
    "checked_in": "cio.status.checked_in",
    "checked_out": "cio.status.checked_out",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CHECKINOUT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a session status."""
    return _STATUS_STYLES.get(status, "")
