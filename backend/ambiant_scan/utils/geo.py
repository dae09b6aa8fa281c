"""Coordinate grid snapping for cache keys.

Coordinates are snapped to a 0.01 degree grid (~1.1 km). Requests within
~0.55 km of each other in both axes land on the same key and share cached
geocoding and environmental data.
"""

import math

GRID_DECIMALS = 2


def round_half_away_from_zero(value: float, decimals: int = GRID_DECIMALS) -> float:
    """Round ``value`` to ``decimals`` places, ties away from zero.

    The tie test is done on the float product ``value * 10**decimals``, so a
    decimal tie that has no exact binary form follows the product.
    """
    scale = 10**decimals
    rounded = math.floor(abs(value) * scale + 0.5) / scale
    # "+ 0.0" turns -0.0 into 0.0
    return math.copysign(rounded, value) + 0.0


def round_coords(lat: float, lon: float) -> tuple[float, float]:
    return round_half_away_from_zero(lat), round_half_away_from_zero(lon)


def format_coord(value: float) -> str:
    """Shortest decimal form of a grid coordinate: 45.5, -73.57, 45."""
    value = float(value) + 0.0
    if value.is_integer():
        return str(int(value))
    return repr(value)


def coords_key(lat: float, lon: float) -> str:
    """Cache key shared by the reverse-geocode and environmental-data stores.

    Example:
        >>> coords_key(45.50123, -73.5674)
        '45.5,-73.57'
    """
    r_lat, r_lon = round_coords(lat, lon)
    return f"{format_coord(r_lat)},{format_coord(r_lon)}"
