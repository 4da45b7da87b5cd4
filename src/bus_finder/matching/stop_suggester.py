"""Fuzzy stop-name suggestions for misspelt origin/destination text.

Suggestions are advisory only: the bus search itself keeps its containment
rule and never consults these scores.
"""

from rapidfuzz import fuzz

from bus_finder.matching.models import (
    MatchConfidence,
    StopSuggestion,
    StopSuggestionResponse,
    SuggestionSource,
    confidence_from_score,
)
from bus_finder.matching.normalizers import normalize_stop_name
from bus_finder.matching.route_extractor import extract_route
from bus_finder.models.catalog import Bus, BusStop


def _compute_fuzzy_score(query_key: str, target_key: str) -> float:
    """Blend of token_set_ratio (word order) and partial_ratio (substrings)."""
    token_score = fuzz.token_set_ratio(query_key, target_key)
    partial_score = fuzz.partial_ratio(query_key, target_key)
    return token_score * 0.7 + partial_score * 0.3


def _candidates(stops: list[BusStop], buses: list[Bus]) -> dict[str, StopSuggestion]:
    """Collect one candidate per normalized name; catalog stops win over route names."""
    candidates: dict[str, StopSuggestion] = {}
    for stop in stops:
        key = normalize_stop_name(stop.name)
        if key and key not in candidates:
            candidates[key] = StopSuggestion(
                name=stop.name,
                score=0.0,
                confidence=MatchConfidence.LOW,
                source=SuggestionSource.STOP,
                stop_id=stop.id,
            )
    for bus in buses:
        for name in extract_route(bus):
            key = normalize_stop_name(name)
            if key and key not in candidates:
                candidates[key] = StopSuggestion(
                    name=name,
                    score=0.0,
                    confidence=MatchConfidence.LOW,
                    source=SuggestionSource.ROUTE,
                )
    return candidates


def suggest_stops(
    query: str,
    stops: list[BusStop],
    buses: list[Bus],
    limit: int = 5,
    min_score: float = 60.0,
) -> StopSuggestionResponse:
    """Suggest known stop names close to a query.

    Args:
        query: Free-text stop name as typed by the user
        stops: Catalog stop records
        buses: Catalog buses (their route entries are candidates too)
        limit: Maximum number of suggestions
        min_score: Minimum score threshold (0-100)

    Returns:
        StopSuggestionResponse with suggestions ordered by score
    """
    query = query.strip()
    query_key = normalize_stop_name(query)
    if not query_key:
        return StopSuggestionResponse(query=query, suggestions=[], best_match=None, resolved=False)

    suggestions: list[StopSuggestion] = []
    for key, candidate in _candidates(stops, buses).items():
        exact = key == query_key
        score = 100.0 if exact else _compute_fuzzy_score(query_key, key)
        if score >= min_score:
            suggestions.append(
                candidate.model_copy(
                    update={"score": score, "confidence": confidence_from_score(score, exact)}
                )
            )

    # Sort by score descending, then by name for stability
    suggestions.sort(key=lambda s: (-s.score, s.name))
    suggestions = suggestions[:limit]

    best_match = suggestions[0] if suggestions else None
    resolved = (
        best_match is not None
        and best_match.confidence in (MatchConfidence.EXACT, MatchConfidence.HIGH)
    )

    return StopSuggestionResponse(
        query=query,
        suggestions=suggestions,
        best_match=best_match,
        resolved=resolved,
    )
