"""Tests for route extraction."""

from bus_finder.matching.route_extractor import (
    DelimitedRoute,
    MissingRoute,
    StopListRoute,
    classify_route,
    extract_route,
    route_stops,
)
from bus_finder.models.catalog import Bus


def make_bus(**fields) -> Bus:
    """Build a Bus from catalog-style keys."""
    return Bus.model_validate({"id": "b1", **fields})


class TestClassifyRoute:
    """Tests for route shape classification."""

    def test_list(self) -> None:
        assert isinstance(classify_route(["Kochi"]), StopListRoute)

    def test_string(self) -> None:
        assert isinstance(classify_route("Kochi - Pala"), DelimitedRoute)

    def test_missing(self) -> None:
        assert isinstance(classify_route(None), MissingRoute)

    def test_unrecognized(self) -> None:
        assert isinstance(classify_route({"stops": ["Kochi"]}), MissingRoute)
        assert isinstance(classify_route(42), MissingRoute)


class TestRouteStops:
    """Tests for flattening stored routes."""

    def test_delimited_string(self) -> None:
        """Test the hyphen-separated form."""
        assert route_stops("Kochi - Kottayam - Changanassery") == [
            "Kochi",
            "Kottayam",
            "Changanassery",
        ]

    def test_mixed_separators(self) -> None:
        """Test en dash, arrow, >, comma and pipe separators."""
        route = "Kochi – Kottayam → Pala > Ettumanoor, Erattupetta | Aluva"
        assert route_stops(route) == [
            "Kochi",
            "Kottayam",
            "Pala",
            "Ettumanoor",
            "Erattupetta",
            "Aluva",
        ]

    def test_space_is_a_separator(self) -> None:
        """Spaces split multi-word names too."""
        assert route_stops("Super Market") == ["Super", "Market"]

    def test_leading_and_trailing_separators(self) -> None:
        assert route_stops(" - Kochi - Pala - ") == ["Kochi", "Pala"]

    def test_list_of_strings(self) -> None:
        assert route_stops(["Kochi", "Kottayam KSRTC Stand"]) == [
            "Kochi",
            "Kottayam KSRTC Stand",
        ]

    def test_list_of_records(self) -> None:
        """Test name, stopName and stop fields, in that priority."""
        route = [
            {"name": "Kochi"},
            {"stopName": "Kottayam"},
            {"stop": "Pala"},
            {"name": "Ettumanoor", "stop": "ignored"},
            {"name": "", "stopName": "Erattupetta"},
        ]
        assert route_stops(route) == ["Kochi", "Kottayam", "Pala", "Ettumanoor", "Erattupetta"]

    def test_drops_empty_entries(self) -> None:
        route = ["Kochi", "", {"time": "08:00 AM"}, None, "Pala"]
        assert route_stops(route) == ["Kochi", "Pala"]

    def test_missing_route(self) -> None:
        assert route_stops(None) == []
        assert route_stops({"unexpected": True}) == []


class TestExtractRoute:
    """Tests for endpoint augmentation."""

    def test_string_route_without_endpoints(self) -> None:
        bus = make_bus(route="Kochi - Kottayam - Changanassery")
        assert extract_route(bus) == ["Kochi", "Kottayam", "Changanassery"]

    def test_prepends_and_appends_missing_endpoints(self) -> None:
        bus = make_bus(**{"from": "Kochi", "to": "Pala", "route": "Kottayam - Ettumanoor"})
        assert extract_route(bus) == ["Kochi", "Kottayam", "Ettumanoor", "Pala"]

    def test_existing_endpoints_not_duplicated(self) -> None:
        """Endpoints present under a different spelling are not added again."""
        bus = make_bus(**{"from": "Kochi", "to": "Pala", "route": ["KOCHI.", "Kottayam", "pala"]})
        assert extract_route(bus) == ["KOCHI.", "Kottayam", "pala"]

    def test_no_route_uses_endpoints(self) -> None:
        bus = make_bus(**{"from": "Kochi", "to": "Pala"})
        assert extract_route(bus) == ["Kochi", "Pala"]

    def test_nothing_declared(self) -> None:
        assert extract_route(make_bus()) == []

    def test_endpoints_always_present(self) -> None:
        bus = make_bus(**{"from": "Aluva", "to": "Thrissur", "route": [{"stop": "Angamaly"}]})
        route = extract_route(bus)
        assert route[0] == "Aluva"
        assert route[-1] == "Thrissur"
