import re
from functools import lru_cache

# Punctuation stripped before comparing stop names
STOP_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")


@lru_cache(maxsize=4096)
def normalize_stop_name(text: str | None) -> str:
    """Normalize a stop name for comparison.

    - Converts to lowercase
    - Removes punctuation (. , / # ! $ % ^ & * ; : { } = - _ ` ~ ( ))
    - Trims surrounding whitespace

    Internal whitespace is kept as-is. The result is only used for comparison
    and is never displayed.

    Example: "Kochi (Vyttila Hub)." -> "kochi vyttila hub"
    Example: "St. Thomas Jn" -> "st thomas jn"
    """
    if not text:
        return ""
    return STOP_PUNCTUATION.sub("", text.lower()).strip()


def stop_keys_match(stop_key: str, query_key: str) -> bool:
    """Loose equality between two normalized stop keys.

    True when either key contains the other, so "kottayam" matches
    "kottayam ksrtc stand" and vice versa. Empty keys never match.
    """
    # Plain containment would let an empty key match every stop
    if not stop_key or not query_key:
        return False
    return query_key in stop_key or stop_key in query_key


def find_stop_index(stop_keys: list[str], query_key: str) -> int | None:
    """Return the first position in a normalized route matching the query key."""
    for index, stop_key in enumerate(stop_keys):
        if stop_keys_match(stop_key, query_key):
            return index
    return None
