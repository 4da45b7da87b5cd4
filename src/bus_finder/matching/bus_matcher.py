"""Directional bus search over the catalog.

Each bus is tried in two tiers:

1. Route match: locate the origin and destination in the bus's extracted
   route. The origin must come before the destination, otherwise the bus runs
   the other way and this tier rejects it.
2. Endpoint match: compare the query against the bus's coarse endpoints
   (first/last route stop, or the declared from/to when the route is too
   short). Used when the route tier finds nothing or rejects the direction.

Stop names are compared on their normalized keys, and a stop matches when
either key contains the other.
"""

import logging
from collections.abc import Iterable

from bus_finder.matching.normalizers import find_stop_index, normalize_stop_name
from bus_finder.matching.ranking import rank_matches
from bus_finder.matching.route_extractor import extract_route, route_stops
from bus_finder.models.catalog import Bus
from bus_finder.models.responses import MatchKind, MatchResult
from bus_finder.services.estimator import DistanceEstimator
from bus_finder.services.timetable import StopRole, Timetable

logger = logging.getLogger(__name__)

# Type filter value meaning "any bus type"
ALL_TYPES = "all"


def _filtered_out(bus: Bus, bus_type: str | None) -> bool:
    """True if a type filter is set and this bus is of another type."""
    return bool(bus_type) and bus_type != ALL_TYPES and bus.bus_type != bus_type


def _contains(field_key: str, query_key: str) -> bool:
    return bool(query_key) and query_key in field_key


def find_route_indices(
    stop_keys: list[str], from_key: str, to_key: str
) -> tuple[int, int] | None:
    """Locate origin and destination in a normalized route.

    For a same-stop query both positions are the first stop matching it.

    Returns:
        (from_index, to_index) when both are found, None otherwise. The pair
        is returned even when the destination precedes the origin.
    """
    if from_key == to_key:
        index = find_stop_index(stop_keys, from_key)
        return (index, index) if index is not None else None

    from_index = find_stop_index(stop_keys, from_key)
    to_index = find_stop_index(stop_keys, to_key)
    if from_index is None or to_index is None:
        return None
    return from_index, to_index


def coarse_endpoints(bus: Bus, route: list[str]) -> tuple[str, str]:
    """First and last route stops, or the declared from/to for short routes."""
    if len(route) >= 2:
        return route[0], route[-1]
    return bus.from_stop or "", bus.to_stop or ""


def endpoints_match(origin_key: str, destination_key: str, from_key: str, to_key: str) -> bool:
    """Endpoint-tier acceptance rule.

    A same-stop query matches if either endpoint contains it. Otherwise the
    origin endpoint must contain the origin query and the destination
    endpoint must contain the destination query.
    """
    if from_key == to_key:
        return _contains(origin_key, from_key) or _contains(destination_key, from_key)
    return _contains(origin_key, from_key) and _contains(destination_key, to_key)


class BusMatcher:
    """Finds buses serving a requested origin and destination, in that order."""

    def __init__(
        self,
        estimator: DistanceEstimator | None = None,
        timetable: Timetable | None = None,
    ):
        self._estimator = estimator or DistanceEstimator()
        self._timetable = timetable or Timetable()

    async def _match_on_route(
        self, bus: Bus, route: list[str], from_index: int, to_index: int
    ) -> MatchResult:
        a_index = min(from_index, to_index)
        b_index = max(from_index, to_index)
        from_name = route[a_index]
        to_name = route[b_index]

        estimate = await self._estimator.estimate(
            from_name, to_name, bus.bus_type, from_index=a_index, to_index=b_index
        )

        return MatchResult(
            bus=bus,
            from_timing=self._timetable.timing_for(
                bus, from_name, f"stop_{a_index}", StopRole.ORIGIN
            ),
            to_timing=self._timetable.timing_for(
                bus, to_name, f"stop_{b_index}", StopRole.DESTINATION
            ),
            distance=estimate.distance,
            estimated_time=estimate.duration,
            fare=estimate.fare,
            match_kind=MatchKind.ROUTE,
            from_index=a_index,
            to_index=b_index,
        )

    def _match_on_endpoints(self, bus: Bus, origin: str, destination: str) -> MatchResult:
        estimate = self._estimator.estimate_default_hop(bus.bus_type)
        return MatchResult(
            bus=bus,
            from_timing=self._timetable.timing_for(bus, origin, "from_field", StopRole.ORIGIN),
            to_timing=self._timetable.timing_for(
                bus, destination, "to_field", StopRole.DESTINATION
            ),
            distance=estimate.distance,
            estimated_time=estimate.duration,
            fare=estimate.fare,
            match_kind=MatchKind.FALLBACK,
        )

    async def match_bus(
        self, bus: Bus, from_key: str, to_key: str, bus_type: str | None = None
    ) -> MatchResult | None:
        """Match a single bus against normalized query keys.

        Returns:
            MatchResult if the bus serves the trip, None otherwise.
        """
        if _filtered_out(bus, bus_type):
            logger.debug(f"[{bus.id}] type {bus.bus_type!r} != {bus_type!r}, skipped")
            return None

        route = extract_route(bus)
        stop_keys = [normalize_stop_name(stop) for stop in route]
        logger.debug(f"[{bus.id}] route: {' | '.join(route)}")

        # A bus with no usable stored route goes straight to its endpoints
        if route_stops(bus.route):
            indices = find_route_indices(stop_keys, from_key, to_key)
            if indices is not None:
                from_index, to_index = indices
                if from_index <= to_index:
                    logger.debug(f"[{bus.id}] route match {from_index} -> {to_index}")
                    return await self._match_on_route(bus, route, from_index, to_index)
                logger.debug(
                    f"[{bus.id}] stops in reverse order ({from_index} > {to_index}), "
                    "trying endpoints"
                )

        origin, destination = coarse_endpoints(bus, route)
        if endpoints_match(
            normalize_stop_name(origin), normalize_stop_name(destination), from_key, to_key
        ):
            logger.debug(f"[{bus.id}] endpoint match {origin!r} -> {destination!r}")
            return self._match_on_endpoints(bus, origin, destination)

        logger.debug(f"[{bus.id}] no match")
        return None

    async def search(
        self,
        catalog: Iterable[Bus],
        from_query: str,
        to_query: str,
        bus_type: str | None = None,
    ) -> list[MatchResult]:
        """Find every bus in the catalog serving from_query -> to_query.

        Buses are processed one at a time in catalog order, so at most one
        distance lookup is outstanding.

        Args:
            catalog: Buses to search
            from_query: Free-text origin stop
            to_query: Free-text destination stop
            bus_type: Only match buses of this type ("all" or None for any)

        Returns:
            Matches ordered by origin departure time
        """
        from_key = normalize_stop_name(from_query)
        to_key = normalize_stop_name(to_query)
        logger.info(f"Searching buses {from_key!r} -> {to_key!r} (type={bus_type!r})")

        matches: list[MatchResult] = []
        for bus in catalog:
            match = await self.match_bus(bus, from_key, to_key, bus_type)
            if match is not None:
                matches.append(match)

        logger.info(f"Found {len(matches)} matching bus(es)")
        return rank_matches(matches)


async def search(
    catalog: Iterable[Bus],
    from_query: str,
    to_query: str,
    bus_type: str | None = None,
    estimator: DistanceEstimator | None = None,
    timetable: Timetable | None = None,
) -> list[MatchResult]:
    """Search a catalog with a one-off BusMatcher."""
    matcher = BusMatcher(estimator=estimator, timetable=timetable)
    return await matcher.search(catalog, from_query, to_query, bus_type)
