"""MCP tools for searching buses."""

from bus_finder.app import mcp
from bus_finder.models.responses import SearchBusesResponse
from bus_finder.services.search_service import search_buses as _search_buses


@mcp.tool()
async def search_buses(
    from_stop: str,
    to_stop: str,
    bus_type: str = "all",
) -> SearchBusesResponse:
    """Find buses that travel from one stop to another.

    Only buses that reach from_stop before to_stop are returned. Stop names
    are matched loosely (case and punctuation are ignored, and partial names
    such as "Kottayam" match "Kottayam KSRTC Stand").

    Examples:
        search_buses(from_stop="Kochi", to_stop="Kottayam")
        search_buses(from_stop="Pala", to_stop="Pala")  # buses stopping at Pala
        search_buses(from_stop="Kochi", to_stop="Kottayam", bus_type="Fast")

    Args:
        from_stop: Origin stop name.
        to_stop: Destination stop name.
        bus_type: Bus type filter (e.g. "KSRTC", "Private", "Fast",
                  "Super Fast", "Ordinary"); "all" for any type.

    Returns:
        SearchBusesResponse with matches sorted by departure time, each with
        distance (km), estimated travel time (minutes) and fare (rupees).
    """
    return await _search_buses(from_stop=from_stop, to_stop=to_stop, bus_type=bus_type)
