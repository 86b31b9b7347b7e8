"""Click base classes for checkinout commands.

Any command or group built with ``examples="..."`` grows an eager
``--examples`` flag that prints those invocations and exits, so ``--help``
stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    owner = ctx.command
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(getattr(owner, "examples", None) or "")
    ctx.exit(0)


class _ExamplesMixin:
    """Store ``examples`` and register the ``--examples`` flag when given."""

    examples: str | None
    params: list[click.Parameter]

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples,
                help="Show usage examples.",
            )
        )


class CheckinCommand(_ExamplesMixin, click.Command):
    """A leaf command that accepts ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class CheckinGroup(_ExamplesMixin, click.Group):
    """A group whose subcommands default to :class:`CheckinCommand`."""

    command_class = CheckinCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
