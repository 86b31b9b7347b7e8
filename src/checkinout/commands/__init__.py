"""Subcommand modules for checkinout.

Provides register_commands() which uses deferred imports to keep
``checkinout --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from checkinout.commands.create import create
    from checkinout.commands.demo import demo
    from checkinout.commands.transition import transition

    cli.add_command(demo)
    cli.add_command(create)
    cli.add_command(transition)
