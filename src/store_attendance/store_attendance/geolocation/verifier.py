from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..common.validators import require_latitude, require_longitude
from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import OutOfRange
from .model import Coordinates


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (haversine, spherical Earth).

    Raises InvalidCoordinates for NaN/infinite or out-of-range input.
    """
    lat1, lat2 = require_latitude(lat1), require_latitude(lat2)
    lon1, lon2 = require_longitude(lon1), require_longitude(lon2)

    phi1, phi2 = radians(lat1), radians(lat2)
    dphi = phi2 - phi1
    dlambda = radians(lon2 - lon1)

    a = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlambda / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points.
    a = min(1.0, a)
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_between(a: Coordinates, b: Coordinates) -> float:
    return distance_meters(a.latitude, a.longitude, b.latitude, b.longitude)


def check_geofence(origin: Coordinates, target: Coordinates, radius_meters: float) -> float:
    """Return the distance from ``origin`` to ``target``.

    Raises OutOfRange when it exceeds ``radius_meters`` (the boundary itself is inside).
    """
    distance = distance_between(origin, target)
    if distance > radius_meters:
        raise OutOfRange(distance, radius_meters)
    return distance
