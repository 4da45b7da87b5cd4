import argparse
import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from bus_finder.app import mcp
from bus_finder.data.config import get_config

# Register tools on the shared MCP instance
from bus_finder.tools import search_tools, stop_tools  # noqa: F401


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the Bus Finder MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from bus_finder import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


async def run_ingest(catalog_path: Path, db_path: Path) -> None:
    """Run catalog ingestion."""
    from bus_finder.data.catalog_loader import CatalogLoader

    loader = CatalogLoader(db_path)
    row_counts = await loader.ingest(catalog_path)

    print("\nIngestion complete. Row counts:")
    for table, count in row_counts.items():
        print(f"  {table}: {count:,}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="bus-finder",
        description="Bus Finder MCP Server",
    )
    subparsers = parser.add_subparsers(dest="command")

    # ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Ingest a bus catalog JSON file into the SQLite database",
    )
    ingest_parser.add_argument(
        "catalog_path",
        type=Path,
        help="Path to the catalog JSON file",
    )
    ingest_parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (default: data/catalog.db or BUS_FINDER_DB_PATH env var)",
    )
    ingest_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.command == "ingest":
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        asyncio.run(run_ingest(args.catalog_path, args.db or get_config().db_path))
    else:
        # Default: run MCP server
        mcp.run()


if __name__ == "__main__":
    main()
