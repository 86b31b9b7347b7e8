"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Configures logging and centralizes outcome emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from checkinout.output.formatters import OutputSettings, format_outcome

if TYPE_CHECKING:
    from checkinout.config.settings import CheckinSettings
    from checkinout.domain.outcome import Outcome, UnitOutcome
    from checkinout.domain.session import LifecyclePolicy


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CheckinSettings) -> None:
        self.settings = settings

        from checkinout.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def policy(self) -> LifecyclePolicy:
        """Lifecycle timing windows from the ``[lifecycle]`` config section."""
        return self.settings.lifecycle.to_policy()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )

    def emit(self, outcome: Outcome[Any] | UnitOutcome, *, label: str | None = None) -> None:
        """Format and output an outcome with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_outcome(outcome, settings=self.output_settings, label=label)
        if outcome.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
