from bus_finder.models.responses import MatchResult


def rank_matches(matches: list[MatchResult]) -> list[MatchResult]:
    """Order matches by origin departure time.

    Times are compared as plain strings, so callers should use one consistent
    format (e.g. "08:05 AM"). Matches with equal times keep their catalog order.
    """
    return sorted(matches, key=lambda m: m.from_timing.departure_time)
