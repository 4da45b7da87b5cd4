"""Catalog loader for ingesting bus and stop records into SQLite."""

import json
import logging
from pathlib import Path
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

# Schema definitions
SCHEMA_SQL = """
-- buses (route and timings kept as JSON text; the route shape varies per bus)
CREATE TABLE buses (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    bus_id TEXT NOT NULL UNIQUE,
    bus_name TEXT,
    from_stop TEXT,
    to_stop TEXT,
    via TEXT,
    bus_type TEXT,
    route_json TEXT,
    timings_json TEXT
);

-- stops
CREATE TABLE stops (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    stop_id TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    district TEXT,
    lat REAL,
    lng REAL
);
"""

INDEX_SQL = """
CREATE INDEX idx_buses_type ON buses(bus_type);
CREATE INDEX idx_stops_name ON stops(name);
"""

BUS_COLUMNS = [
    "bus_id",
    "bus_name",
    "from_stop",
    "to_stop",
    "via",
    "bus_type",
    "route_json",
    "timings_json",
]

STOP_COLUMNS = ["stop_id", "name", "district", "lat", "lng"]


class CatalogLoader:
    """Loader for ingesting a JSON bus catalog into SQLite.

    The catalog document looks like:

        {
          "buses": [{"id": "b1", "busName": "...", "from": "...", "to": "...",
                     "via": "...", "type": "KSRTC", "route": ..., "timings": [...]}],
          "stops": [{"id": "s1", "name": "...", "district": "...",
                     "location": {"lat": 9.93, "lng": 76.26}}]
        }
    """

    def __init__(self, db_path: Path):
        """Initialize the loader.

        Args:
            db_path: Path where the SQLite database will be created.
        """
        self.db_path = Path(db_path)

    async def ingest(self, catalog_path: Path) -> dict[str, int]:
        """Ingest a catalog JSON file into SQLite.

        Uses atomic swap: loads into temp DB, then replaces the target DB.

        Args:
            catalog_path: Path to the catalog JSON document.

        Returns:
            Dictionary with row counts per table.

        Raises:
            FileNotFoundError: If the catalog file doesn't exist.
            ValueError: If the document is not a valid catalog.
        """
        catalog_path = Path(catalog_path)
        if not catalog_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

        document = self._read_document(catalog_path)

        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        temp_db = self.db_path.with_suffix(".tmp.db")

        try:
            # Remove temp db if it exists from a previous failed run
            temp_db.unlink(missing_ok=True)

            async with aiosqlite.connect(temp_db) as db:
                await db.executescript(SCHEMA_SQL)
                row_counts = {
                    "buses": await self._load_buses(db, document.get("buses") or []),
                    "stops": await self._load_stops(db, document.get("stops") or []),
                }
                await db.executescript(INDEX_SQL)
                await db.commit()

            # atomic swap
            if self.db_path.exists():
                self.db_path.unlink()
            temp_db.rename(self.db_path)

            logger.info(f"Catalog ingestion complete: {self.db_path}")
            return row_counts

        except Exception:
            temp_db.unlink(missing_ok=True)
            raise

    def _read_document(self, catalog_path: Path) -> dict[str, Any]:
        """Parse and sanity-check the catalog document."""
        try:
            document = json.loads(catalog_path.read_text(encoding="utf-8-sig"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{catalog_path.name} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise ValueError(f"{catalog_path.name} must contain a JSON object")
        for key in ("buses", "stops"):
            if key in document and not isinstance(document[key], list | type(None)):
                raise ValueError(f"{catalog_path.name}: '{key}' must be a list")
        if not document.get("buses"):
            raise ValueError("No buses in catalog - check catalog data")
        return document

    async def _load_buses(self, db: aiosqlite.Connection, records: list[Any]) -> int:
        logger.info("Loading buses...")
        rows = []
        seen_ids: set[str] = set()
        skipped = 0
        duplicates = 0
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                skipped += 1
                continue
            bus_id = self._text(record.get("id")) or f"bus_{index}"
            if bus_id in seen_ids:
                logger.warning(f"Skipping bus with duplicate id {bus_id!r}")
                duplicates += 1
                continue
            seen_ids.add(bus_id)
            rows.append(
                (
                    bus_id,
                    self._text(record.get("busName")),
                    self._text(record.get("from")),
                    self._text(record.get("to")),
                    self._text(record.get("via")),
                    self._text(record.get("type")),
                    json.dumps(record.get("route")),
                    json.dumps(record.get("timings") or []),
                )
            )

        placeholders = ",".join(["?"] * len(BUS_COLUMNS))
        await db.executemany(
            f"INSERT INTO buses ({','.join(BUS_COLUMNS)}) VALUES ({placeholders})", rows
        )
        logger.info(
            f"  Loaded {len(rows):,} buses"
            + (f" (skipped {skipped:,} invalid)" if skipped else "")
            + (f" (skipped {duplicates:,} duplicate ids)" if duplicates else "")
        )
        return len(rows)

    async def _load_stops(self, db: aiosqlite.Connection, records: list[Any]) -> int:
        logger.info("Loading stops...")
        rows = []
        seen_ids: set[str] = set()
        skipped = 0
        duplicates = 0
        for index, record in enumerate(records):
            name = self._text(record.get("name")) if isinstance(record, dict) else None
            if not name:
                skipped += 1
                continue
            stop_id = self._text(record.get("id")) or f"stop_{index}"
            if stop_id in seen_ids:
                logger.warning(f"Skipping stop with duplicate id {stop_id!r}")
                duplicates += 1
                continue
            seen_ids.add(stop_id)
            lat, lng = self._coordinates(record)
            rows.append(
                (
                    stop_id,
                    name,
                    self._text(record.get("district")),
                    lat,
                    lng,
                )
            )

        placeholders = ",".join(["?"] * len(STOP_COLUMNS))
        await db.executemany(
            f"INSERT INTO stops ({','.join(STOP_COLUMNS)}) VALUES ({placeholders})", rows
        )
        logger.info(
            f"  Loaded {len(rows):,} stops"
            + (f" (skipped {skipped:,} invalid)" if skipped else "")
            + (f" (skipped {duplicates:,} duplicate ids)" if duplicates else "")
        )
        return len(rows)

    def _text(self, value: Any) -> str | None:
        """Convert a JSON scalar to stripped text, None when empty."""
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def _coordinates(self, record: dict[str, Any]) -> tuple[float | None, float | None]:
        """Read lat/lng from a nested location object or flat fields."""
        source = record.get("location") if isinstance(record.get("location"), dict) else record
        try:
            lat = float(source["lat"])
            lng = float(source["lng"])
        except (KeyError, TypeError, ValueError):
            return None, None
        return lat, lng


async def get_table_counts(db_path: Path) -> dict[str, int]:
    """Get row counts for all tables in the database.

    Args:
        db_path: Path to the SQLite database.

    Returns:
        Dictionary mapping table names to row counts.
    """
    counts: dict[str, int] = {}
    async with aiosqlite.connect(db_path) as db:
        for table_name in ("buses", "stops"):
            async with db.execute(f"SELECT COUNT(*) FROM {table_name}") as cursor:
                row = await cursor.fetchone()
                counts[table_name] = row[0] if row else 0
    return counts
