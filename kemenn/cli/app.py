from __future__ import annotations

import typer

from kemenn.cli.commands.announce import announce


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(announce)


def main() -> None:
    app()
