from enum import Enum

from pydantic import BaseModel, Field

from bus_finder.models.catalog import Bus, BusStop


class MatchKind(str, Enum):
    """Which tier of the search produced a match."""

    ROUTE = "route"  # Directional match on the extracted route
    FALLBACK = "fallback"  # Match on the coarse from/to endpoints


class Timing(BaseModel):
    stop_id: str
    stop_name: str
    arrival_time: str = Field(description="Arrival time, e.g. '08:00 AM'")
    departure_time: str = Field(description="Departure time, e.g. '08:05 AM'")


class MatchResult(BaseModel):
    """One bus's trip offering for a search query."""

    bus: Bus
    from_timing: Timing
    to_timing: Timing
    distance: float = Field(description="Distance in kilometres")
    estimated_time: int = Field(description="Estimated travel time in minutes")
    fare: int = Field(description="Fare in rupees")
    match_kind: MatchKind
    from_index: int | None = Field(
        default=None, description="Origin position in the route (route matches only)"
    )
    to_index: int | None = Field(
        default=None, description="Destination position in the route (route matches only)"
    )


class SearchBusesResponse(BaseModel):
    success: bool
    data: list[MatchResult] = Field(default_factory=list)
    count: int = Field(default=0, description="Number of matches returned")
    error: str | None = None


class StopsResponse(BaseModel):
    success: bool
    data: list[BusStop] = Field(default_factory=list)
    count: int = Field(default=0, description="Number of stops returned")
    error: str | None = None
