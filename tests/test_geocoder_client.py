"""Tests for the geocoding HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from bus_finder.data.config import BusFinderConfig
from bus_finder.data.geocoder_client import GeocoderClient


@pytest.fixture
def config() -> BusFinderConfig:
    """Create a test config."""
    return BusFinderConfig(
        BUS_FINDER_GEOCODER_URL="https://example.com/search",
        BUS_FINDER_REGION_HINT="Kerala, India",
    )


def mock_http_client(payload) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.json.return_value = payload

    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=mock_response)
    return mock_client


@pytest.mark.asyncio
async def test_geocode_returns_first_result(config: BusFinderConfig):
    mock_client = mock_http_client([{"lat": "9.5916", "lon": "76.5222"}, {"lat": "0", "lon": "0"}])

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with GeocoderClient(config) as client:
            coords = await client.geocode("Kottayam")

    assert coords == (9.5916, 76.5222)

    # Query includes the region hint and asks for JSON
    _, kwargs = mock_client.get.call_args
    assert kwargs["params"]["q"] == "Kottayam, Kerala, India"
    assert kwargs["params"]["format"] == "json"


@pytest.mark.asyncio
async def test_geocode_no_results(config: BusFinderConfig):
    mock_client = mock_http_client([])

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with GeocoderClient(config) as client:
            assert await client.geocode("Nowhere") is None


@pytest.mark.asyncio
async def test_geocode_unexpected_body(config: BusFinderConfig):
    mock_client = mock_http_client({"error": "rate limited"})

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with GeocoderClient(config) as client:
            with pytest.raises(ValueError):
                await client.geocode("Kottayam")


@pytest.mark.asyncio
async def test_client_sends_user_agent_and_timeout(config: BusFinderConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_http_client([])

        async with GeocoderClient(config):
            pass

    _, kwargs = mock_client_class.call_args
    assert kwargs["headers"]["User-Agent"] == config.user_agent
    assert kwargs["timeout"] == config.geocoder_timeout_seconds


@pytest.mark.asyncio
async def test_geocode_requires_context(config: BusFinderConfig):
    client = GeocoderClient(config)

    with pytest.raises(RuntimeError):
        await client.geocode("Kottayam")
