"""API endpoints for the timeline UI."""

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from tripline.core.logger import log_info
from tripline.services.daylight import calculate_daylight, calculate_daylight_for_range
from tripline.services.position import layout_to_dict
from tripline.web.state import app_state, log_buffer

router = APIRouter()


class FitRequest(BaseModel):
    """Fit-to-width zoom request."""
    container_width: float = Field(gt=0)
    longest_label_width: Optional[float] = Field(default=None, ge=0)


class ContainerUpdate(BaseModel):
    """Container size reported by the renderer."""
    width: float = Field(gt=0)


class RungSelect(BaseModel):
    """Explicit ladder rung; omitted = nearest to the fitted width."""
    index: Optional[int] = None


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")


# --- Trip endpoints ---

@router.get("/api/layout")
async def get_layout():
    """Get the computed timeline layout."""
    return layout_to_dict(app_state.get_layout())


@router.get("/api/locations")
async def list_locations():
    """Get all locations."""
    return {"locations": [location.to_dict() for location in app_state.locations.values()]}


@router.get("/api/steps")
async def list_steps():
    """Get all steps sorted by start."""
    return {"steps": [step.to_dict() for step in app_state.steps]}


# --- Daylight endpoints ---

@router.get("/api/daylight")
async def get_daylight(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    date: str = Query(...),
    tz: int = Query(0, ge=-12, le=12),
):
    """Daylight window for arbitrary coordinates."""
    day = _parse_date(date)
    return calculate_daylight(lat, lng, day, tz).to_dict()


@router.get("/api/locations/{location_id}/daylight")
async def get_location_daylight(
    location_id: str,
    date: str = Query(...),
    days: int = Query(1, ge=1, le=366),
):
    """Daylight windows of a location for consecutive days."""
    location = app_state.locations.get(location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")

    start = _parse_date(date)
    end = start + timedelta(days=days - 1)
    windows = calculate_daylight_for_range(location.lat, location.lng, start, end, location.timezone_offset)
    return {
        "location_id": location_id,
        "daylight": {day: window.to_dict() for day, window in windows.items()},
    }


# --- Zoom endpoints ---

@router.get("/api/zoom")
async def get_zoom():
    """Current zoom state."""
    with app_state.lock:
        return app_state.zoom.to_dict()


@router.post("/api/zoom/in")
async def zoom_in():
    """Next wider ladder rung."""
    with app_state.lock:
        app_state.zoom.zoom_in()
        return app_state.zoom.to_dict()


@router.post("/api/zoom/out")
async def zoom_out():
    """Next narrower ladder rung."""
    with app_state.lock:
        app_state.zoom.zoom_out()
        return app_state.zoom.to_dict()


@router.post("/api/zoom/fit")
async def zoom_fit(request: FitRequest):
    """Switch to fit-to-width zoom."""
    label_width = request.longest_label_width
    if label_width is None:
        label_width = app_state.layout_config.location_label_width
    with app_state.lock:
        app_state.zoom.zoom_to_fit(request.container_width, app_state.days_in_range(), label_width)
        return app_state.zoom.to_dict()


@router.post("/api/zoom/discrete")
async def zoom_discrete(request: RungSelect):
    """Leave fit mode or pick a rung."""
    with app_state.lock:
        if request.index is None:
            app_state.zoom.exit_fit()
        else:
            if not 0 <= request.index < len(app_state.zoom.ladder):
                raise HTTPException(status_code=400, detail="Invalid zoom index")
            app_state.zoom.zoom_to_rung(request.index)
        return app_state.zoom.to_dict()


@router.put("/api/container")
async def update_container(update: ContainerUpdate):
    """Report the container width; recompute is throttled."""
    log_info(f"container resized to {update.width}px")
    app_state.resize_throttle.submit(update.width)
    with app_state.lock:
        return {"accepted": True, "zoom": app_state.zoom.to_dict()}


# --- Logs ---

@router.get("/api/logs")
async def get_logs():
    """Get all log entries."""
    return {"logs": log_buffer.get_all()}


@router.delete("/api/logs")
async def clear_logs():
    """Clear the log buffer."""
    log_buffer.clear()
    return {"success": True}
