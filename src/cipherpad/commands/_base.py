"""Click command classes carrying an eager ``--examples`` flag.

``--help`` stays a terse synopsis; ``--examples`` prints copy-pasteable
invocations and exits before any argument is validated, so
``cipherpad secret upload --examples`` works without its required pairs.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds ``--examples`` to any Click command that is given examples text."""

    params: list[click.Parameter]
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class CipherCommand(_ExamplesMixin, click.Command):
    """Leaf command; pass ``examples=`` to enable ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class CipherGroup(_ExamplesMixin, click.Group):
    """Command group whose subcommands default to :class:`CipherCommand`."""

    command_class = CipherCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
