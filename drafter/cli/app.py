from __future__ import annotations

import typer

from drafter import __version__
from drafter.cli.commands.check import check
from drafter.cli.commands.classify_cmd import classify_title
from drafter.cli.commands.draft_cmd import draft


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(draft)
app.command("classify")(classify_title)
app.command()(check)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
