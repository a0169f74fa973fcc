"""
City lookup by coordinates.

Great-circle (haversine) distance scan over a fixed list of metros.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Optional


EARTH_RADIUS_KM: Final[float] = 6371.0
DEFAULT_NEARBY_KM: Final[float] = 200.0


@dataclass(frozen=True)
class City:
    name: str
    lat: float
    lon: float


CITIES: Final[tuple[City, ...]] = (
    City("Mumbai", 19.076, 72.8777),
    City("Pune", 18.5204, 73.8567),
    City("Bengaluru", 12.9716, 77.5946),
    City("Hyderabad", 17.385, 78.4867),
    City("Noida", 28.5355, 77.3910),
    City("Delhi", 28.7041, 77.1025),
    City("Gurugram", 28.4595, 77.0266),
    City("Chennai", 13.0827, 80.2707),
    City("Kolkata", 22.5726, 88.3639),
    City("Ahmedabad", 23.0225, 72.5714),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearby_cities(
    lat: float,
    lon: float,
    max_distance_km: float = DEFAULT_NEARBY_KM,
    cities: tuple[City, ...] = CITIES,
) -> list[str]:
    """Names of cities within ``max_distance_km``, closest first."""
    distances = [(haversine_km(lat, lon, c.lat, c.lon), c.name) for c in cities]
    return [name for distance, name in sorted(distances) if distance <= max_distance_km]


def nearest_city(lat: float, lon: float, cities: tuple[City, ...] = CITIES) -> Optional[City]:
    """Closest city regardless of distance, or None if there are no cities."""
    if not cities:
        return None
    return min(cities, key=lambda c: haversine_km(lat, lon, c.lat, c.lon))
