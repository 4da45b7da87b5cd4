"""MCP tools for bus stops."""

from bus_finder.app import mcp
from bus_finder.matching.models import StopSuggestionResponse
from bus_finder.models.responses import StopsResponse
from bus_finder.services.stop_service import list_stops as _list_stops
from bus_finder.services.stop_service import nearby_stops as _nearby_stops
from bus_finder.services.stop_service import suggest_stop_names as _suggest_stop_names


@mcp.tool()
async def list_stops() -> StopsResponse:
    """List all bus stops in the catalog."""
    return await _list_stops()


@mcp.tool()
async def nearby_stops(
    lat: float,
    lng: float,
    radius_km: float = 5.0,
    limit: int = 10,
) -> StopsResponse:
    """Find bus stops near a location, nearest first.

    Args:
        lat: Latitude of the search point.
        lng: Longitude of the search point.
        radius_km: Search radius in kilometres (default 5, max 100).
        limit: Maximum number of results (default 10, max 100).

    Returns:
        StopsResponse with stops sorted by distance_km.
    """
    # Validate limit
    if limit < 1:
        limit = 1
    elif limit > 100:
        limit = 100

    # Validate radius
    if radius_km <= 0:
        radius_km = 0.1
    elif radius_km > 100:
        radius_km = 100

    return await _nearby_stops(lat=lat, lng=lng, radius_km=radius_km, limit=limit)


@mcp.tool()
async def suggest_stops(query: str, limit: int = 5) -> StopSuggestionResponse:
    """Suggest known stop names for possibly misspelt text.

    Useful before search_buses when a search returns nothing, e.g.
    "Kottyam" -> "Kottayam".

    Args:
        query: Stop name as typed.
        limit: Maximum suggestions to return (1-10, default 5).

    Returns:
        StopSuggestionResponse with suggestions ordered by score; resolved is
        True when the top suggestion is safe to use directly.
    """
    limit = max(1, min(limit, 10))
    return await _suggest_stop_names(query=query, limit=limit)
