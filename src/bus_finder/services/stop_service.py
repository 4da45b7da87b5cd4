"""Stop listing, nearby search and name suggestions over the catalog."""

import logging
from pathlib import Path

import aiosqlite

from bus_finder.data.catalog import fetch_all_buses, fetch_all_stops
from bus_finder.matching.models import StopSuggestionResponse
from bus_finder.matching.stop_suggester import suggest_stops
from bus_finder.models.responses import StopsResponse
from bus_finder.services.estimator import haversine_km

logger = logging.getLogger(__name__)

MISSING_COORDINATES_ERROR = "Latitude and longitude are required"


async def list_stops(db_path: Path | None = None) -> StopsResponse:
    """List every stop in the catalog."""
    try:
        stops = await fetch_all_stops(db_path)
    except (FileNotFoundError, aiosqlite.Error) as e:
        logger.error(f"Error fetching stops: {e}")
        return StopsResponse(success=False, error="Failed to fetch stops")

    return StopsResponse(success=True, data=stops, count=len(stops))


async def nearby_stops(
    lat: float | None,
    lng: float | None,
    radius_km: float = 5.0,
    limit: int = 10,
    db_path: Path | None = None,
) -> StopsResponse:
    """Find stops within a radius of a point, nearest first.

    Stops without coordinates are never returned.

    Args:
        lat: Latitude of the search point.
        lng: Longitude of the search point.
        radius_km: Search radius in kilometres.
        limit: Maximum number of results.
        db_path: Optional database path.

    Returns:
        StopsResponse with distance_km set on every stop.
    """
    if lat is None or lng is None:
        return StopsResponse(success=False, error=MISSING_COORDINATES_ERROR)

    try:
        stops = await fetch_all_stops(db_path)
    except (FileNotFoundError, aiosqlite.Error) as e:
        logger.error(f"Error fetching nearby stops: {e}")
        return StopsResponse(success=False, error="Failed to fetch nearby stops")

    nearby = []
    for stop in stops:
        if stop.location is None:
            continue
        distance = haversine_km((lat, lng), (stop.location.lat, stop.location.lng))
        if distance <= radius_km:
            nearby.append(stop.model_copy(update={"distance_km": round(distance, 2)}))

    nearby.sort(key=lambda s: s.distance_km)
    nearby = nearby[:limit]
    return StopsResponse(success=True, data=nearby, count=len(nearby))


async def suggest_stop_names(
    query: str,
    limit: int = 5,
    db_path: Path | None = None,
) -> StopSuggestionResponse:
    """Suggest catalog stop names close to a query.

    Raises:
        FileNotFoundError: If the database doesn't exist.
    """
    stops = await fetch_all_stops(db_path)
    buses = await fetch_all_buses(db_path)
    return suggest_stops(query, stops, buses, limit=limit)
