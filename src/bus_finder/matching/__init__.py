"""Stop-name normalization, route extraction and stop suggestions.

Import the bus matcher from bus_finder.matching.bus_matcher.
"""

from bus_finder.matching.models import (
    MatchConfidence,
    StopSuggestion,
    StopSuggestionResponse,
    SuggestionSource,
)
from bus_finder.matching.normalizers import (
    find_stop_index,
    normalize_stop_name,
    stop_keys_match,
)
from bus_finder.matching.ranking import rank_matches
from bus_finder.matching.route_extractor import extract_route, route_stops
from bus_finder.matching.stop_suggester import suggest_stops

__all__ = [
    # Suggestions
    "suggest_stops",
    # Routes
    "extract_route",
    "route_stops",
    "rank_matches",
    # Models
    "MatchConfidence",
    "StopSuggestion",
    "StopSuggestionResponse",
    "SuggestionSource",
    # Normalizers
    "normalize_stop_name",
    "stop_keys_match",
    "find_stop_index",
]
