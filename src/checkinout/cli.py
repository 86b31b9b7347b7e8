"""Root CLI group for checkinout with global flags and command registration."""

from __future__ import annotations

import click

from checkinout import __version__
from checkinout.commands import register_commands
from checkinout.commands._base import CheckinGroup
from checkinout.commands._context import AppContext
from checkinout.config.settings import CheckinSettings


@click.group(cls=CheckinGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="checkinout")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """checkinout: check-in/check-out session lifecycle."""
    settings = CheckinSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
