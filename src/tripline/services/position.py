"""Conversion of layout geometry into renderer-agnostic style records."""

from typing import Dict, Optional

from tripline.models.timeline import DayCell, Label, MoveRectangle, Position, TimelineLayout, Track


def format_px(value: float) -> str:
    """Format a pixel value without float noise: 12.0 → "12px", 12.5 → "12.5px"."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text}px"


def convert_position_to_style(position: Optional[Position]) -> Dict[str, str]:
    """Convert a rectangle to a style record.

    A missing rectangle maps to {"display": "none"}.
    """
    if position is None:
        return {"display": "none"}
    return {key: format_px(value) for key, value in position.to_dict().items()}


def _label_to_dict(label: Label) -> dict:
    return {
        "text": label.text,
        "anchor": label.anchor,
        "style": {"left": format_px(label.left), "top": format_px(label.top)},
    }


def _cell_to_dict(cell: DayCell) -> dict:
    return {
        "date": cell.date,
        "timestamp": cell.timestamp,
        "has_stay": cell.has_stay,
        "has_move": cell.has_move,
        "is_empty": cell.is_empty,
        "is_weekend": cell.is_weekend,
        "daylight": cell.daylight.to_dict(),
        "style": convert_position_to_style(cell.rect),
        "daylight_style": convert_position_to_style(cell.daylight_rect),
    }


def _track_to_dict(track: Track) -> dict:
    return {
        "location_id": track.location_id,
        "name": track.name,
        "top": track.track_top_px,
        "day_cells": [_cell_to_dict(cell) for cell in track.day_cells],
    }


def _move_to_dict(move: MoveRectangle) -> dict:
    return {
        "step_id": move.step_id,
        "start_location_id": move.start_location_id,
        "finish_location_id": move.finish_location_id,
        "style": convert_position_to_style(move.rect),
        "begin_time_label": _label_to_dict(move.begin_time_label),
        "end_time_label": _label_to_dict(move.end_time_label),
        "duration_label": _label_to_dict(move.duration_label),
    }


def layout_to_dict(layout: TimelineLayout) -> dict:
    """Serialize a layout with style records, ready for JSON."""
    return {
        "min_timestamp": layout.min_timestamp,
        "max_timestamp": layout.max_timestamp,
        "day_width": layout.day_width_px,
        "days": layout.days_in_range,
        "total_width": layout.total_width_px,
        "total_height": layout.total_height_px,
        "is_empty": layout.is_empty,
        "tracks": [_track_to_dict(track) for track in layout.tracks.values()],
        "moves": [_move_to_dict(move) for move in layout.moves],
    }
