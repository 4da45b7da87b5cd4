"""Read-only access to the bus catalog."""

import json
import logging
from pathlib import Path
from typing import Any

import aiosqlite

from bus_finder.data.database import get_db
from bus_finder.models.catalog import Bus, BusStop, Location, ScheduledStop

logger = logging.getLogger(__name__)


def _load_json(value: str | None, bus_id: str, column: str) -> Any:
    """Decode a JSON column, treating corrupt data as missing."""
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"Bus {bus_id}: unreadable {column}, ignoring")
        return None


def _parse_timings(raw: Any) -> list[ScheduledStop]:
    """Keep only well-formed {stop, time} entries."""
    if not isinstance(raw, list):
        return []
    timings = []
    for entry in raw:
        if isinstance(entry, dict) and entry.get("stop") and entry.get("time"):
            timings.append(ScheduledStop(stop=str(entry["stop"]), time=str(entry["time"])))
    return timings


def _row_to_bus(row: aiosqlite.Row) -> Bus:
    """Convert a database row to a Bus."""
    bus_id = row["bus_id"]
    return Bus(
        id=bus_id,
        bus_name=row["bus_name"] or "",
        from_stop=row["from_stop"] or "",
        to_stop=row["to_stop"] or "",
        via=row["via"],
        bus_type=row["bus_type"] or "",
        route=_load_json(row["route_json"], bus_id, "route"),
        timings=_parse_timings(_load_json(row["timings_json"], bus_id, "timings")),
    )


def _row_to_stop(row: aiosqlite.Row) -> BusStop:
    """Convert a database row to a BusStop."""
    location = None
    if row["lat"] is not None and row["lng"] is not None:
        location = Location(lat=float(row["lat"]), lng=float(row["lng"]))
    return BusStop(
        id=row["stop_id"],
        name=row["name"],
        district=row["district"],
        location=location,
    )


async def fetch_all_buses(db_path: Path | None = None) -> list[Bus]:
    """Fetch every bus in the catalog, in ingestion order.

    Raises:
        FileNotFoundError: If the database doesn't exist.
        aiosqlite.Error: If the database cannot be read.
    """
    sql = """
        SELECT bus_id, bus_name, from_stop, to_stop, via, bus_type, route_json, timings_json
        FROM buses
        ORDER BY seq
    """
    async with get_db(db_path) as db:
        async with db.execute(sql) as cursor:
            rows = await cursor.fetchall()
    return [_row_to_bus(row) for row in rows]


async def fetch_all_stops(db_path: Path | None = None) -> list[BusStop]:
    """Fetch every stop in the catalog, in ingestion order.

    Raises:
        FileNotFoundError: If the database doesn't exist.
        aiosqlite.Error: If the database cannot be read.
    """
    sql = "SELECT stop_id, name, district, lat, lng FROM stops ORDER BY seq"
    async with get_db(db_path) as db:
        async with db.execute(sql) as cursor:
            rows = await cursor.fetchall()
    return [_row_to_stop(row) for row in rows]
