"""Tests for stop listing, nearby search and suggestions."""

from pathlib import Path

import pytest

from bus_finder.matching.models import MatchConfidence, SuggestionSource
from bus_finder.services.stop_service import (
    MISSING_COORDINATES_ERROR,
    list_stops,
    nearby_stops,
    suggest_stop_names,
)

KOTTAYAM = (9.5916, 76.5222)


class TestListStops:
    async def test_all_stops(self, db_path: Path) -> None:
        response = await list_stops(db_path=db_path)

        assert response.success is True
        assert response.count == 4
        assert [s.name for s in response.data] == [
            "Kottayam",
            "Ettumanoor",
            "Kochi",
            "Pala Bus Stand",
        ]

    async def test_missing_database(self, tmp_path: Path) -> None:
        response = await list_stops(db_path=tmp_path / "missing.db")

        assert response.success is False
        assert response.data == []


class TestNearbyStops:
    async def test_small_radius(self, db_path: Path) -> None:
        response = await nearby_stops(*KOTTAYAM, radius_km=5, db_path=db_path)

        assert [s.id for s in response.data] == ["s-kottayam"]
        assert response.data[0].distance_km == 0

    async def test_sorted_by_distance(self, db_path: Path) -> None:
        response = await nearby_stops(*KOTTAYAM, radius_km=100, db_path=db_path)

        assert [s.id for s in response.data] == ["s-kottayam", "s-ettumanoor", "s-kochi"]
        distances = [s.distance_km for s in response.data]
        assert distances == sorted(distances)

    async def test_limit(self, db_path: Path) -> None:
        response = await nearby_stops(*KOTTAYAM, radius_km=100, limit=2, db_path=db_path)

        assert response.count == 2

    async def test_stops_without_location_excluded(self, db_path: Path) -> None:
        response = await nearby_stops(*KOTTAYAM, radius_km=1000, db_path=db_path)

        assert "s-pala" not in {s.id for s in response.data}

    async def test_missing_coordinates(self, db_path: Path) -> None:
        response = await nearby_stops(None, 76.5, db_path=db_path)

        assert response.success is False
        assert response.error == MISSING_COORDINATES_ERROR


class TestSuggestStopNames:
    async def test_misspelt_stop(self, db_path: Path) -> None:
        response = await suggest_stop_names("Kottyam", db_path=db_path)

        assert response.best_match is not None
        assert response.best_match.name == "Kottayam"
        assert response.best_match.source == SuggestionSource.STOP
        assert response.best_match.stop_id == "s-kottayam"
        assert response.resolved is True

    async def test_route_only_stop(self, db_path: Path) -> None:
        response = await suggest_stop_names("chingavanam", db_path=db_path)

        assert response.best_match is not None
        assert response.best_match.name == "Chingavanam"
        assert response.best_match.source == SuggestionSource.ROUTE
        assert response.best_match.confidence == MatchConfidence.EXACT
        assert response.best_match.stop_id is None

    async def test_missing_database(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await suggest_stop_names("Kottayam", db_path=tmp_path / "missing.db")
