"""Tests for per-stop timings."""

from bus_finder.models.catalog import Bus
from bus_finder.services.timetable import (
    DESTINATION_PLACEHOLDER,
    ORIGIN_PLACEHOLDER,
    StopRole,
    Timetable,
)


def make_bus(timings: list[dict] | None = None) -> Bus:
    return Bus.model_validate({"id": "b1", "timings": timings or []})


class TestTimetable:
    def test_entered_time_used(self) -> None:
        bus = make_bus([{"stop": "Kochi", "time": "06:30 AM"}])

        timing = Timetable().timing_for(bus, "kochi.", "stop_0", StopRole.ORIGIN)

        assert timing.stop_id == "stop_0"
        assert timing.stop_name == "kochi."
        assert timing.arrival_time == "06:30 AM"
        assert timing.departure_time == "06:30 AM"

    def test_origin_placeholder(self) -> None:
        timing = Timetable().timing_for(make_bus(), "Kochi", "stop_0", StopRole.ORIGIN)

        assert (timing.arrival_time, timing.departure_time) == ORIGIN_PLACEHOLDER

    def test_destination_placeholder(self) -> None:
        bus = make_bus([{"stop": "Kochi", "time": "06:30 AM"}])

        timing = Timetable().timing_for(bus, "Pala", "stop_3", StopRole.DESTINATION)

        assert (timing.arrival_time, timing.departure_time) == DESTINATION_PLACEHOLDER

    def test_blank_time_ignored(self) -> None:
        bus = make_bus([{"stop": "Kochi", "time": "  "}])

        assert Timetable().scheduled_time(bus, "Kochi") is None
