"""Per-stop timings for matched buses."""

from enum import Enum

from bus_finder.matching.normalizers import normalize_stop_name
from bus_finder.models.catalog import Bus
from bus_finder.models.responses import Timing

# Placeholder (arrival, departure) used when a bus has no time entered for the stop
ORIGIN_PLACEHOLDER = ("08:00 AM", "08:05 AM")
DESTINATION_PLACEHOLDER = ("10:30 AM", "10:35 AM")


class StopRole(str, Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"


class Timetable:
    """Looks up when a bus is at a stop.

    Uses the stop times entered with the bus when one matches the stop,
    otherwise fixed placeholder times for the stop's role in the trip.
    """

    def scheduled_time(self, bus: Bus, stop_name: str) -> str | None:
        """Time entered for this stop on the bus, if any."""
        key = normalize_stop_name(stop_name)
        if not key:
            return None
        for entry in bus.timings:
            if normalize_stop_name(entry.stop) == key and entry.time.strip():
                return entry.time.strip()
        return None

    def timing_for(self, bus: Bus, stop_name: str, stop_id: str, role: StopRole) -> Timing:
        scheduled = self.scheduled_time(bus, stop_name)
        if scheduled is not None:
            arrival = departure = scheduled
        elif role is StopRole.ORIGIN:
            arrival, departure = ORIGIN_PLACEHOLDER
        else:
            arrival, departure = DESTINATION_PLACEHOLDER

        return Timing(
            stop_id=stop_id,
            stop_name=stop_name,
            arrival_time=arrival,
            departure_time=departure,
        )
