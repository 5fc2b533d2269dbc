"""FastAPI application serving the timeline layout."""

from typing import Optional

from fastapi import FastAPI

from tripline import __version__
from tripline.core.config import Config
from tripline.models.trip import Trip
from tripline.services.preferences import JsonPreferenceStore, PreferenceStore
from tripline.services.trip_loader import TripLoader
from tripline.web.routes import router
from tripline.web.state import app_state


def create_app(
    config: Optional[Config] = None,
    trip: Optional[Trip] = None,
    store: Optional[PreferenceStore] = None,
) -> FastAPI:
    """Create and configure the FastAPI app.

    Args:
        config: Trip configuration; the trip is loaded from config.trip_path
            unless `trip` is given
        trip: Already loaded trip
        store: Preference store; defaults to the JSON file in the work dir
    """
    app = FastAPI(
        title="Tripline",
        description="Timeline layout and daylight API",
        version=__version__,
    )

    if trip is None:
        trip = TripLoader().load(config.trip_path) if config else Trip()

    if store is None and config is not None:
        config.ensure_dirs()
        store = JsonPreferenceStore(config.preferences_file)

    app_state.configure(trip, config=config, store=store)

    app.include_router(router)

    @app.get("/")
    async def index():
        """Basic info about the loaded trip."""
        return {
            "name": "tripline",
            "version": __version__,
            "trip": config.trip_path.name if config else None,
            "locations_count": len(app_state.locations),
            "steps_count": len(app_state.trip.steps),
        }

    return app
