from enum import Enum

from pydantic import BaseModel, Field


class MatchConfidence(str, Enum):
    """Confidence level for a stop-name suggestion.

    - EXACT: normalized names are identical
    - HIGH: score >= 85
    - MEDIUM: score >= 70
    - LOW: score >= 60
    """

    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestionSource(str, Enum):
    """Where a suggested stop name was found."""

    STOP = "stop"  # Catalog stop record
    ROUTE = "route"  # Stop named in some bus's route or endpoints


def confidence_from_score(score: float, exact: bool = False) -> MatchConfidence:
    """Determine confidence level from score."""
    if exact:
        return MatchConfidence.EXACT
    if score >= 85:
        return MatchConfidence.HIGH
    if score >= 70:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


class StopSuggestion(BaseModel):
    """A stop name close to the query text."""

    name: str
    score: float = Field(description="Match score (0-100)")
    confidence: MatchConfidence = Field(description="Confidence level of the match")
    source: SuggestionSource
    stop_id: str | None = Field(default=None, description="Catalog stop ID (stop records only)")


class StopSuggestionResponse(BaseModel):
    """Response from suggest_stops tool."""

    query: str = Field(description="Original query string")
    suggestions: list[StopSuggestion] = Field(description="Suggested names, ordered by score")
    best_match: StopSuggestion | None = Field(
        default=None, description="Top suggestion when suggestions exist"
    )
    resolved: bool = Field(
        description="True if best_match has EXACT or HIGH confidence (safe to auto-use)"
    )
