"""Main CLI definition for Tripline."""

from typing import Optional

import typer

from tripline import __version__
from tripline.cli.commands.daylight import daylight
from tripline.cli.commands.layout import layout
from tripline.cli.commands.serve import serve
from tripline.core.logger import set_verbose


def version_callback(value: bool) -> None:
    if value:
        print(f"tripline {__version__}")
        raise typer.Exit()


app = typer.Typer(help="Timeline layout and daylight engine for travel itineraries.")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Print service calls and results",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show the version",
    ),
) -> None:
    set_verbose(verbose)


app.command()(layout)
app.command()(daylight)
app.command()(serve)


if __name__ == "__main__":
    app()
