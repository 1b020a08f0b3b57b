"""
Distance helpers.

Locations are mappings with latitude/longitude (or lat/lng/lon) keys, or
(latitude, longitude) pairs.
"""
from __future__ import annotations

from typing import Any, Mapping, Tuple

from geopy.distance import geodesic

_MILES_PER_METRE = 0.000621371


def _as_point(location: Any) -> Tuple[float, float]:
    if isinstance(location, Mapping):
        lat = location.get("latitude", location.get("lat"))
        lon = location.get("longitude", location.get("lng", location.get("lon")))
    else:
        try:
            lat, lon = location
        except (TypeError, ValueError):
            raise ValueError(f"Not a location: {location!r}") from None
    if lat is None or lon is None:
        raise ValueError(f"Location needs a latitude and a longitude: {location!r}")
    return float(lat), float(lon)


def metres_to_miles(metres: float) -> float:
    return metres * _MILES_PER_METRE


def miles_between(location1: Any, location2: Any) -> float:
    """Distance in miles, from the geodesic distance rounded to whole metres."""
    metres = round(geodesic(_as_point(location1), _as_point(location2)).meters)
    return metres_to_miles(metres)
