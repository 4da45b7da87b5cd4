"""Bus search service: validates a query, reads the catalog, runs the matcher."""

import logging
from pathlib import Path

import aiosqlite

from bus_finder.data.catalog import fetch_all_buses
from bus_finder.matching.bus_matcher import BusMatcher
from bus_finder.matching.normalizers import normalize_stop_name
from bus_finder.models.responses import SearchBusesResponse
from bus_finder.services.estimator import DistanceEstimator

logger = logging.getLogger(__name__)

MISSING_STOPS_ERROR = "From and to parameters are required"
SEARCH_FAILED_ERROR = "Failed to search buses"


async def search_buses(
    from_stop: str | None,
    to_stop: str | None,
    bus_type: str | None = None,
    db_path: Path | None = None,
    estimator: DistanceEstimator | None = None,
) -> SearchBusesResponse:
    """Search the catalog for buses from one stop to another.

    Args:
        from_stop: Origin stop text (required)
        to_stop: Destination stop text (required)
        bus_type: Optional bus type filter; "all" means no filter
        db_path: Optional database path
        estimator: Optional estimator (defaults to one built from configuration)

    Returns:
        SearchBusesResponse. success=False with an error message when the
        query is incomplete or the catalog cannot be read.
    """
    if not normalize_stop_name(from_stop) or not normalize_stop_name(to_stop):
        return SearchBusesResponse(success=False, error=MISSING_STOPS_ERROR)

    try:
        buses = await fetch_all_buses(db_path)
    except (FileNotFoundError, aiosqlite.Error) as e:
        logger.error(f"Error searching buses: {e}")
        return SearchBusesResponse(success=False, error=SEARCH_FAILED_ERROR)

    logger.info(f"Total buses in catalog: {len(buses)}")
    matcher = BusMatcher(estimator=estimator)
    matches = await matcher.search(buses, from_stop, to_stop, bus_type)

    return SearchBusesResponse(success=True, data=matches, count=len(matches))
