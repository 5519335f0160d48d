"""Click command classes carrying an optional ``--examples`` flag.

Pass ``examples="..."`` to ``@click.command`` / ``@click.group`` (with
``cls=UserApiCommand`` or ``cls=UserApiGroup``) and the command gains an
eager ``--examples`` option that prints the text and exits. Help output
stays short; invocation recipes for the user API live here instead.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show example invocations and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class UserApiCommand(_ExamplesMixin, click.Command):
    pass


class UserApiGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`UserApiCommand`."""

    command_class = UserApiCommand
