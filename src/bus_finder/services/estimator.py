"""Distance, travel time and fare estimation for matched trips.

Distances come from a best-effort real-world lookup (gazetteer, then the
network geocoder, then haversine). When the lookup fails for any reason the
estimate falls back to a deterministic function of the two stops' positions
in the route. Nothing raised by the lookup escapes this module.
"""

import logging
import math
from dataclasses import dataclass

from bus_finder.data.cache import TTLCache
from bus_finder.data.config import BusFinderConfig, get_config
from bus_finder.data.gazetteer import lookup_known_location
from bus_finder.data.geocoder_client import GeocoderClient
from bus_finder.matching.normalizers import normalize_stop_name

logger = logging.getLogger(__name__)

# Earth's radius in kilometres for haversine calculation
EARTH_RADIUS_KM = 6371.0

# Distance assumed between two consecutive stops when no real distance is known
HOP_DISTANCE_KM = 10.0

# Average bus speed used to turn distance into travel time
AVERAGE_SPEED_KMH = 40.0

# Fare = BASE_FARE + distance * per-km rate for the bus type, in whole rupees
BASE_FARE = 10
DEFAULT_RATE_PER_KM = 1.0
FARE_RATES_PER_KM: dict[str, float] = {
    "ordinary": 1.0,
    "private": 1.0,
    "ksrtc": 1.1,
    "fast": 1.2,
    "super fast": 1.4,
    "express": 1.5,
}

# How long a stop that could not be geocoded is remembered as unknown
FAILED_GEOCODE_TTL_SECONDS = 300.0

Coordinates = tuple[float, float]

# Module-level geocode caches (shared by all estimators)
_geocode_cache: TTLCache[str, Coordinates] | None = None
_failed_geocodes: TTLCache[str, bool] | None = None


def _get_geocode_cache(ttl: float) -> TTLCache[str, Coordinates]:
    """Get the geocode cache singleton, recreating it when the TTL changes."""
    global _geocode_cache
    if _geocode_cache is None or _geocode_cache.ttl != ttl:
        _geocode_cache = TTLCache[str, Coordinates](ttl=ttl)
    return _geocode_cache


def _get_failed_geocodes() -> TTLCache[str, bool]:
    """Get or create the cache of stop names the geocoder could not resolve."""
    global _failed_geocodes
    if _failed_geocodes is None:
        _failed_geocodes = TTLCache[str, bool](ttl=FAILED_GEOCODE_TTL_SECONDS)
    return _failed_geocodes


def reset_service() -> None:
    """Drop the geocode caches and re-read configuration. Useful for testing."""
    global _geocode_cache, _failed_geocodes
    _geocode_cache = None
    _failed_geocodes = None
    get_config.cache_clear()


@dataclass
class DistanceLookup:
    """Outcome of a real-world distance lookup."""

    success: bool
    distance: float = 0.0  # km
    duration: int = 0  # minutes


@dataclass
class TripEstimate:
    distance: float  # km
    duration: int  # minutes
    fare: int  # rupees


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Calculate the great-circle distance between two (lat, lng) points in km."""
    lat1_rad = math.radians(a[0])
    lat2_rad = math.radians(b[0])
    delta_lat = math.radians(b[0] - a[0])
    delta_lon = math.radians(b[1] - a[1])

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def calculate_distance(from_index: int, to_index: int) -> float:
    """Positional fallback distance: one fixed hop per stop between the two positions."""
    return abs(to_index - from_index) * HOP_DISTANCE_KM


def calculate_time(distance: float) -> int:
    """Travel time in minutes at the average bus speed."""
    return round(distance / AVERAGE_SPEED_KMH * 60)


def fare_rate(bus_type: str | None) -> float:
    """Per-km rate for a bus type (case-insensitive, unknown types pay the default)."""
    if not bus_type:
        return DEFAULT_RATE_PER_KM
    return FARE_RATES_PER_KM.get(bus_type.strip().lower(), DEFAULT_RATE_PER_KM)


def calculate_fare(distance: float, bus_type: str | None) -> int:
    """Fare in whole rupees for a distance on a given bus type."""
    # Halves round up
    return math.floor(BASE_FARE + distance * fare_rate(bus_type) + 0.5)


class DistanceEstimator:
    """Estimates distance, duration and fare between two stops of a route.

    Lookups are awaited one at a time by the caller; each geocoder request is
    bounded by the configured timeout.
    """

    def __init__(self, config: BusFinderConfig | None = None):
        self._config = config or get_config()
        self._cache = _get_geocode_cache(self._config.geocode_cache_ttl_seconds)
        self._failed = _get_failed_geocodes()

    async def geocode(self, name: str) -> Coordinates | None:
        """Resolve a stop name to coordinates, or None if it cannot be located."""
        known = lookup_known_location(name)
        if known is not None:
            return known

        if not self._config.geocoding_enabled:
            return None

        key = normalize_stop_name(name)
        if not key:
            return None

        cached = self._cache.get(key)
        if cached is not None or self._failed.get(key):
            return cached

        async with self._cache.lock:
            cached = self._cache.get(key)
            if cached is not None or self._failed.get(key):
                return cached

            try:
                async with GeocoderClient(self._config) as client:
                    coords = await client.geocode(name)
            except Exception as e:
                logger.warning(f"Geocoding failed for {name!r}: {e}")
                coords = None

            if coords is None:
                self._failed.set(key, True)
            else:
                self._cache.set(key, coords)
            return coords

    async def lookup_distance(self, from_name: str, to_name: str) -> DistanceLookup:
        """Real-world distance between two named stops.

        Returns a failed DistanceLookup instead of raising when either stop
        cannot be geocoded.
        """
        from_key = normalize_stop_name(from_name)
        if from_key and from_key == normalize_stop_name(to_name):
            return DistanceLookup(success=True, distance=0.0, duration=0)

        from_coords = await self.geocode(from_name)
        if from_coords is None:
            return DistanceLookup(success=False)
        to_coords = await self.geocode(to_name)
        if to_coords is None:
            return DistanceLookup(success=False)

        distance = round(haversine_km(from_coords, to_coords), 1)
        return DistanceLookup(success=True, distance=distance, duration=calculate_time(distance))

    async def estimate(
        self,
        from_name: str,
        to_name: str,
        bus_type: str | None,
        from_index: int = 0,
        to_index: int = 1,
    ) -> TripEstimate:
        """Estimate a trip between two stops of a route.

        Args:
            from_name: Display name of the boarding stop
            to_name: Display name of the alighting stop
            bus_type: Bus category used for fare pricing
            from_index: Position of the boarding stop in the route
            to_index: Position of the alighting stop in the route

        Returns:
            TripEstimate with distance (km), duration (minutes) and fare (rupees)
        """
        lookup = await self.lookup_distance(from_name, to_name)
        if lookup.success:
            distance = lookup.distance
            duration = lookup.duration
        else:
            logger.debug(
                f"No real distance for {from_name!r} -> {to_name!r}; "
                f"using {abs(to_index - from_index)} hop(s)"
            )
            distance = calculate_distance(from_index, to_index)
            duration = calculate_time(distance)

        return TripEstimate(
            distance=distance,
            duration=duration,
            fare=calculate_fare(distance, bus_type),
        )

    def estimate_default_hop(self, bus_type: str | None) -> TripEstimate:
        """Position-agnostic estimate used for matches on a bus's coarse endpoints."""
        distance = calculate_distance(0, 1)
        return TripEstimate(
            distance=distance,
            duration=calculate_time(distance),
            fare=calculate_fare(distance, bus_type),
        )
