"""Command serve - run the layout API."""

import webbrowser
from pathlib import Path

import typer
import uvicorn
from rich.console import Console

from tripline.core.config import Config
from tripline.core.exceptions import TripParseError
from tripline.core.logger import set_web_mode
from tripline.web.app import create_app

console = Console()


def serve(
    trip_path: Path = typer.Argument(
        ...,
        help="Path to the trip JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="Interface to bind",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        "-p",
        help="Port for the web server",
        min=1024,
        max=65535,
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Do not open the API docs in a browser",
    ),
) -> None:
    """Serve the timeline layout as a JSON API."""
    set_web_mode(True)

    config = Config(trip_path=trip_path)

    console.print("[blue]Tripline API[/blue]")
    console.print(f"  Trip: {trip_path}")
    console.print(f"  Preferences: {config.preferences_file}")
    console.print(f"  Port: {port}")
    console.print()

    try:
        app = create_app(config=config)
    except TripParseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    url = f"http://{host}:{port}/docs"
    if not no_browser:
        console.print(f"[green]Opening browser:[/green] {url}")
        webbrowser.open(url)
    else:
        console.print(f"[green]Running at:[/green] {url}")

    console.print()
    console.print("[dim]Ctrl+C to stop[/dim]")
    console.print()

    try:
        uvicorn.run(app, host=host, port=port, log_level="warning")
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")
