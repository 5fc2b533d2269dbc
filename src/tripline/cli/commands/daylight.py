"""Command daylight - sunrise and sunset for a place."""

from datetime import date, timedelta

import typer
from rich.console import Console
from rich.table import Table

from tripline.services.daylight import calculate_daylight_for_range

console = Console()


def daylight(
    lat: float = typer.Argument(..., help="Latitude in degrees", min=-90, max=90),
    lng: float = typer.Argument(..., help="Longitude in degrees (east positive)", min=-180, max=180),
    day: str = typer.Argument(..., help="First date (YYYY-MM-DD)"),
    tz: int = typer.Option(
        0,
        "--tz",
        "-t",
        help="UTC offset in hours",
        min=-12,
        max=12,
    ),
    days: int = typer.Option(
        1,
        "--days",
        "-d",
        help="Number of consecutive days",
        min=1,
        max=366,
    ),
) -> None:
    """Print local sunrise and sunset times."""
    try:
        start = date.fromisoformat(day)
    except ValueError:
        console.print(f"[red]Error:[/red] invalid date {day}, expected YYYY-MM-DD")
        raise typer.Exit(1)

    windows = calculate_daylight_for_range(lat, lng, start, start + timedelta(days=days - 1), tz)

    table = Table(title=f"Daylight at {lat:.4f}, {lng:.4f} (UTC{tz:+d})")
    table.add_column("Date", style="cyan")
    table.add_column("Sunrise")
    table.add_column("Sunset")
    table.add_column("Daylight", style="green")

    for ymd, window in windows.items():
        if window.is_polar_night:
            length = "polar night"
        elif window.is_polar_day:
            length = "polar day"
        else:
            hours, minutes = divmod(window.day_length_minutes, 60)
            length = f"{hours}h {minutes}m"
        table.add_row(ymd, window.sunrise_local, window.sunset_local, length)

    console.print(table)
