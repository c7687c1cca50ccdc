"""Spherical geometry helpers shared by the nearby search and its storage queries."""

import math

from localconnect.config import settings


def km_to_radians(distance_km: float, earth_radius_km: float | None = None) -> float:
    """Convert a surface distance into the angular radius used by ``$centerSphere``."""
    radius = earth_radius_km or settings.earth_radius_km
    return float(distance_km) / radius


def haversine_km(
    lng1: float,
    lat1: float,
    lng2: float,
    lat2: float,
    earth_radius_km: float | None = None,
) -> float:
    """Great-circle distance between two ``(lng, lat)`` points in kilometres."""
    radius = earth_radius_km or settings.earth_radius_km
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * radius * math.asin(min(1.0, math.sqrt(a)))


def point_coordinates(location: object) -> tuple[float, float] | None:
    """Return ``(lng, lat)`` from a GeoJSON point document, or None when unusable."""
    if not isinstance(location, dict):
        return None
    coordinates = location.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        return None
    try:
        return float(coordinates[0]), float(coordinates[1])
    except (TypeError, ValueError):
        return None
