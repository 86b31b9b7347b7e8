"""Locate ``checkinout.toml``.

The nearest file wins, searching from the working directory up to the
filesystem root. ``CHECKINOUT_CONFIG`` names a file directly and disables
the search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "checkinout.toml"
CONFIG_ENV_VAR = "CHECKINOUT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A ``CHECKINOUT_CONFIG`` value that does not name an existing file means
    "no config"; the walk-up is skipped in that case too.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        pinned = Path(override)
        return pinned if pinned.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
