"""Pydantic models for bus catalog entities."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScheduledStop(BaseModel):
    """A stop time entered for a bus (e.g. {"stop": "Kochi", "time": "08:00 AM"})."""

    stop: str
    time: str


class Bus(BaseModel):
    """A bus and its route as stored in the catalog.

    Field aliases follow the catalog document keys (busName, from, to, type).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    bus_name: str = Field(default="", alias="busName")
    from_stop: str = Field(default="", alias="from")
    to_stop: str = Field(default="", alias="to")
    via: str | None = None
    bus_type: str = Field(default="", alias="type")
    # Absent, a delimited string, or a list of strings / {name|stopName|stop} records
    route: Any = None
    timings: list[ScheduledStop] = Field(default_factory=list)


class Location(BaseModel):
    lat: float
    lng: float


class BusStop(BaseModel):
    """A named bus stop with optional coordinates."""

    id: str
    name: str
    district: str | None = None
    location: Location | None = None
    distance_km: float | None = Field(
        default=None, description="Distance from search coordinates (nearby search only)"
    )
