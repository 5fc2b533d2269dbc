"""Command layout - compute the timeline layout of a trip."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from tripline.core.config import Config
from tripline.core.exceptions import TripParseError
from tripline.models.timeline import TimelineLayout
from tripline.models.trip import Trip
from tripline.services.grid_builder import GridBuilder
from tripline.services.position import format_px, layout_to_dict
from tripline.services.preferences import JsonPreferenceStore
from tripline.services.range_resolver import resolve_range
from tripline.services.timeutils import format_iso_with_tz
from tripline.services.trip_loader import TripLoader
from tripline.services.zoom import ZoomController

console = Console()


def layout(
    trip_path: Path = typer.Argument(
        ...,
        help="Path to the trip JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    zoom: Optional[int] = typer.Option(
        None,
        "--zoom",
        "-z",
        help="Day width in px (snapped to the nearest zoom rung)",
        min=1,
    ),
    fit: Optional[float] = typer.Option(
        None,
        "--fit",
        "-f",
        help="Fit the trip into a container of this width (px)",
        min=1,
    ),
    label_width: Optional[float] = typer.Option(
        None,
        "--label-width",
        help="Width of the longest location label (px) for --fit",
        min=0,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the layout as JSON",
    ),
) -> None:
    """Compute the timeline layout of a trip and print it."""
    config = Config(trip_path=trip_path)

    try:
        trip = TripLoader().load(trip_path)
    except TripParseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    controller = ZoomController(store=JsonPreferenceStore(config.preferences_file), config=config.layout)
    if fit is not None:
        days = resolve_range(trip.sorted_steps(), trip.locations).days
        longest = label_width if label_width is not None else config.layout.location_label_width
        controller.zoom_to_fit(fit, days, longest)
    elif zoom is not None:
        controller.zoom_to_rung(controller.nearest_index(zoom))

    result = GridBuilder(config.layout).build(trip.sorted_steps(), trip.locations, controller.day_width)

    if as_json:
        typer.echo(json.dumps(layout_to_dict(result), ensure_ascii=False, indent=2))
        return

    if result.is_empty:
        console.print("[yellow]No steps to lay out[/yellow]")
        return

    _print_summary(result, trip, controller)


def _print_summary(result: TimelineLayout, trip: Trip, controller: ZoomController) -> None:
    """Print tracks and moves as tables."""
    mode = "fit" if controller.is_fit_zoom else f"rung {controller.mode}"
    console.print(
        f"[blue]Timeline[/blue] {result.days_in_range} days, "
        f"{format_px(result.day_width_px)}/day ({mode}), "
        f"{format_px(result.total_width_px)} x {format_px(result.total_height_px)}"
    )
    console.print()

    tracks = Table(title="Tracks")
    tracks.add_column("Location", style="cyan")
    tracks.add_column("UTC offset")
    tracks.add_column("Top", justify="right")
    tracks.add_column("Days", justify="right")
    tracks.add_column("Stay days", justify="right")
    tracks.add_column("Move days", justify="right")
    tracks.add_column("First day daylight")

    for track in result.tracks.values():
        location = trip.locations[track.location_id]
        first = track.day_cells[0] if track.day_cells else None
        daylight = f"{first.daylight.sunrise_local}-{first.daylight.sunset_local}" if first else "-"
        tracks.add_row(
            track.name,
            f"{location.timezone_offset:+d}",
            format_px(track.track_top_px),
            str(len(track.day_cells)),
            str(sum(1 for cell in track.day_cells if cell.has_stay)),
            str(sum(1 for cell in track.day_cells if cell.has_move)),
            daylight,
        )
    console.print(tracks)

    if not result.moves:
        return

    moves = Table(title="Moves")
    moves.add_column("Step", style="cyan")
    moves.add_column("From")
    moves.add_column("To")
    moves.add_column("Departure")
    moves.add_column("Arrival")
    moves.add_column("Duration", style="green")
    moves.add_column("Left", justify="right")
    moves.add_column("Width", justify="right")

    for move in result.moves:
        start = trip.locations[move.start_location_id]
        finish = trip.locations[move.finish_location_id]
        step = next(s for s in trip.steps if s.id == move.step_id)
        moves.add_row(
            move.step_id,
            start.name,
            finish.name,
            format_iso_with_tz(step.start_timestamp, start.timezone_offset).replace("T", " "),
            format_iso_with_tz(step.finish_timestamp, finish.timezone_offset).replace("T", " "),
            move.duration_label.text,
            format_px(move.rect.left),
            format_px(move.rect.width),
        )
    console.print(moves)
