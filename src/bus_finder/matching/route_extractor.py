"""Extract an ordered list of stop names from a bus's stored route.

Routes reach the catalog in several shapes depending on how they were entered:

- a list of stop names: ["Kochi", "Kottayam"]
- a list of records: [{"name": "Kochi"}, {"stopName": "Kottayam"}, {"stop": "Pala"}]
- a single delimited string: "Kochi - Kottayam → Pala"
- nothing at all

Each shape is classified into a variant first and then flattened by the
extractor for that variant. Routes are assumed to be stored in travel order;
the matcher relies on it both for direction checks and for the coarse
first/last endpoints used by the fallback tier.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from bus_finder.matching.normalizers import normalize_stop_name
from bus_finder.models.catalog import Bus

logger = logging.getLogger(__name__)

# Separators between stops in a single-string route (hyphen, en dash, arrow, >, comma, pipe, space)
ROUTE_TEXT_SEPARATORS = re.compile(r"\s*[-–→> ,|]+\s*")

# Record fields that may hold the stop name, in priority order
STOP_NAME_FIELDS = ("name", "stopName", "stop")


@dataclass(frozen=True)
class DelimitedRoute:
    """Route stored as one delimited string."""

    text: str


@dataclass(frozen=True)
class StopListRoute:
    """Route stored as a list of strings and/or stop records."""

    entries: list[Any]


@dataclass(frozen=True)
class MissingRoute:
    """Route absent or stored in a shape we do not recognize."""


RouteShape = DelimitedRoute | StopListRoute | MissingRoute


def classify_route(raw: Any) -> RouteShape:
    """Classify a raw stored route into one of the known shapes."""
    if isinstance(raw, list | tuple):
        return StopListRoute(list(raw))
    if isinstance(raw, str):
        return DelimitedRoute(raw)
    if raw is not None:
        logger.debug(f"Unrecognized route shape {type(raw).__name__}; treating as empty")
    return MissingRoute()


def _entry_name(entry: Any) -> str:
    """Get the stop name of a single route list entry."""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        for field in STOP_NAME_FIELDS:
            value = entry.get(field)
            if value:
                return value if isinstance(value, str) else str(value)
        return ""
    if entry is None:
        return ""
    return str(entry)


def _stops_from_list(route: StopListRoute) -> list[str]:
    return [name for name in (_entry_name(e) for e in route.entries) if name]


def _stops_from_text(route: DelimitedRoute) -> list[str]:
    return [part for part in ROUTE_TEXT_SEPARATORS.split(route.text) if part]


def route_stops(raw: Any) -> list[str]:
    """Flatten a raw stored route into stop names, without endpoint augmentation."""
    shape = classify_route(raw)
    if isinstance(shape, StopListRoute):
        return _stops_from_list(shape)
    if isinstance(shape, DelimitedRoute):
        return _stops_from_text(shape)
    return []


def extract_route(bus: Bus) -> list[str]:
    """Extract the ordered stop names of a bus's route.

    The declared origin is prepended and the declared destination appended
    when no existing entry normalizes equal to them, so both endpoints are
    always present when declared. Order is otherwise preserved.

    Example:
        Bus(from="Kochi", to="Pala", route="Kottayam - Ettumanoor")
        -> ["Kochi", "Kottayam", "Ettumanoor", "Pala"]
    """
    stops = route_stops(bus.route)

    origin_key = normalize_stop_name(bus.from_stop)
    if bus.from_stop and not any(normalize_stop_name(s) == origin_key for s in stops):
        stops.insert(0, bus.from_stop)

    destination_key = normalize_stop_name(bus.to_stop)
    if bus.to_stop and not any(normalize_stop_name(s) == destination_key for s in stops):
        stops.append(bus.to_stop)

    return stops
