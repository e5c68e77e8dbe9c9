from __future__ import annotations

import typer

from draftrel import __version__
from draftrel.cli.commands.draft_cmd import draft, latest


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(draft)
app.command()(latest)


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
    """Draft release metadata for the next desktop app release."""


def main() -> None:
    app()
