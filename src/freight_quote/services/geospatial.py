"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, box

EARTH_RADIUS_KM = 6371.0

# North America approximate bounds: southern Mexico to northern Canada/Alaska,
# western Alaska to eastern Canada.
NORTH_AMERICA_BOUNDS = box(-180.0, 7.0, -50.0, 83.0)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def is_within_north_america(lat: float, lon: float) -> bool:
    """Return True if the point lies inside the supported region, edges included."""

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return NORTH_AMERICA_BOUNDS.covers(Point(lon, lat))
