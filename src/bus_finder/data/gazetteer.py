"""Built-in coordinates for common Kerala bus destinations.

Consulted before the network geocoder so frequently searched towns resolve
without an HTTP round trip. Keys are normalized stop names.
"""

from bus_finder.matching.normalizers import normalize_stop_name

# normalized name -> (lat, lng)
KNOWN_LOCATIONS: dict[str, tuple[float, float]] = {
    "thiruvananthapuram": (8.5241, 76.9366),
    "trivandrum": (8.5241, 76.9366),
    "kochi": (9.9312, 76.2673),
    "cochin": (9.9312, 76.2673),
    "ernakulam": (9.9816, 76.2999),
    "kozhikode": (11.2588, 75.7804),
    "calicut": (11.2588, 75.7804),
    "thrissur": (10.5276, 76.2144),
    "kannur": (11.8745, 75.3704),
    "kollam": (8.8932, 76.6141),
    "palakkad": (10.7867, 76.6548),
    "alappuzha": (9.4981, 76.3388),
    "alleppey": (9.4981, 76.3388),
    "malappuram": (11.0510, 76.0711),
    "kottayam": (9.5916, 76.5222),
    "pala": (9.7074, 76.6817),
    "erattupetta": (9.6878, 76.7783),
    "ettumanoor": (9.6700, 76.5600),
    "pravithanam": (9.6950, 76.7100),
    "pramadom": (9.6950, 76.7100),
    "ponkunnam": (9.5656, 76.7700),
    "changanassery": (9.4461, 76.5458),
    "tiruvalla": (9.3833, 76.5745),
    "thalassery": (11.7489, 75.4899),
    "kasaragod": (12.4996, 74.9869),
    "wayanad": (11.6854, 76.1320),
    "sulthan bathery": (11.6854, 76.1320),
    "attingal": (8.6958, 76.8164),
    "varkala": (8.7379, 76.7163),
    "neyyattinkara": (8.4001, 77.0882),
    "perumbavoor": (10.1167, 76.4833),
    "muvattupuzha": (9.9797, 76.5772),
    "kothamangalam": (10.0572, 76.6358),
    "angamaly": (10.1914, 76.3878),
    "aluva": (10.1081, 76.3528),
}


def lookup_known_location(name: str) -> tuple[float, float] | None:
    """Return built-in coordinates for a stop name, if known."""
    return KNOWN_LOCATIONS.get(normalize_stop_name(name))
