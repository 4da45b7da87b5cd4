"""Shared test configuration."""

import json
from pathlib import Path

import pytest

from bus_finder.data.catalog_loader import CatalogLoader
from bus_finder.services.estimator import reset_service


@pytest.fixture(autouse=True)
def offline_geocoding(monkeypatch: pytest.MonkeyPatch):
    """Keep tests off the network: only the built-in gazetteer is consulted."""
    monkeypatch.setenv("BUS_FINDER_GEOCODING_ENABLED", "false")
    reset_service()
    yield
    reset_service()


SAMPLE_CATALOG = {
    "buses": [
        {
            "id": "ksrtc-101",
            "busName": "Kochi - Pala Fast",
            "from": "Kochi",
            "to": "Pala",
            "via": "Kottayam",
            "type": "Fast",
            "route": "Kochi - Kottayam - Ettumanoor - Pala",
            "timings": [
                {"stop": "Kochi", "time": "07:15 AM"},
                {"stop": "Pala", "time": "10:05 AM"},
            ],
        },
        {
            "id": "pvt-22",
            "busName": "St. Mary's",
            "from": "Pala",
            "to": "Kochi",
            "type": "Private",
            "route": [{"name": "Pala"}, {"stopName": "Kottayam"}, {"stop": "Kochi"}],
        },
        {
            "id": "ord-7",
            "busName": "Kottayam Ordinary",
            "from": "Kottayam",
            "to": "Changanassery",
            "type": "Ordinary",
            "route": ["Kottayam", "Chingavanam", "Changanassery"],
            "timings": [{"stop": "Kottayam", "time": "06:00 AM"}],
        },
        {
            "id": "pvt-9",
            "busName": "Aluva Shuttle",
            "from": "Aluva",
            "to": "Angamaly",
            "type": "Private",
        },
    ],
    "stops": [
        {
            "id": "s-kottayam",
            "name": "Kottayam",
            "district": "Kottayam",
            "location": {"lat": 9.5916, "lng": 76.5222},
        },
        {"id": "s-ettumanoor", "name": "Ettumanoor", "lat": 9.6700, "lng": 76.5600},
        {"id": "s-kochi", "name": "Kochi", "location": {"lat": 9.9312, "lng": 76.2673}},
        {"id": "s-pala", "name": "Pala Bus Stand", "district": "Kottayam"},
    ],
}


@pytest.fixture
def sample_catalog_file(tmp_path: Path) -> Path:
    """Write the sample catalog document to disk."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(SAMPLE_CATALOG))
    return path


@pytest.fixture
async def db_path(sample_catalog_file: Path, tmp_path: Path) -> Path:
    """Create a test database from the sample catalog."""
    db_file = tmp_path / "test.db"
    loader = CatalogLoader(db_file)
    await loader.ingest(sample_catalog_file)
    return db_file
