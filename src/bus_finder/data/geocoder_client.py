import logging

import httpx

from bus_finder.data.config import BusFinderConfig

logger = logging.getLogger(__name__)


class GeocoderClient:
    """Async HTTP client for a Nominatim-compatible geocoding API.

    Usage:
        async with GeocoderClient(config) as client:
            coords = await client.geocode("Kottayam")
    """

    def __init__(self, config: BusFinderConfig):
        """Initialize the client.

        Args:
            config: Configuration with geocoder URL, timeout and user agent.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GeocoderClient":
        """Enter async context - create HTTP client."""
        headers = {"User-Agent": self._config.user_agent}
        self._client = httpx.AsyncClient(
            headers=headers, timeout=self._config.geocoder_timeout_seconds
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def geocode(self, place: str) -> tuple[float, float] | None:
        """Geocode a place name to (lat, lng).

        Returns:
            Coordinates of the best result, or None if the provider found nothing.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails or times out.
            ValueError: If the response body is not a usable result list.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        query = f"{place}, {self._config.region_hint}" if self._config.region_hint else place
        response = await self._client.get(
            self._config.geocoder_url,
            params={"q": query, "format": "json", "limit": 1},
        )
        response.raise_for_status()

        results = response.json()
        if not isinstance(results, list):
            raise ValueError(f"Unexpected geocoder response for {place!r}")
        if not results:
            logger.debug(f"No geocoding result for {place!r}")
            return None

        best = results[0]
        return float(best["lat"]), float(best["lon"])
