from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BusFinderConfig(BaseSettings):
    """Configuration for the catalog database and the geocoding provider.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    db_path: Path = Field(default=Path("data/catalog.db"), alias="BUS_FINDER_DB_PATH")

    # Geocoding (Nominatim-compatible search API)
    geocoding_enabled: bool = Field(default=True, alias="BUS_FINDER_GEOCODING_ENABLED")
    geocoder_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        alias="BUS_FINDER_GEOCODER_URL",
    )
    geocoder_timeout_seconds: float = Field(default=5.0, alias="BUS_FINDER_GEOCODER_TIMEOUT")
    user_agent: str = Field(default="bus-finder-mcp/0.1", alias="BUS_FINDER_USER_AGENT")
    geocode_cache_ttl_seconds: int = Field(default=86400, alias="BUS_FINDER_GEOCODE_CACHE_TTL")
    region_hint: str = Field(default="Kerala, India", alias="BUS_FINDER_REGION_HINT")


@lru_cache
def get_config() -> BusFinderConfig:
    """Get Bus Finder configuration (cached singleton).

    Returns:
        BusFinderConfig with values from .env file or environment variables.
    """
    return BusFinderConfig()
