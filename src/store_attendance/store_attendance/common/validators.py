from __future__ import annotations

import math

from ..core.exceptions import InvalidCoordinates


def require_latitude(value) -> float:
    lat = _require_finite(value, "latitude")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinates(f"latitude out of range: {lat}")
    return lat


def require_longitude(value) -> float:
    lon = _require_finite(value, "longitude")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinates(f"longitude out of range: {lon}")
    return lon


def _require_finite(value, field_name: str) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidCoordinates(f"{field_name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinates(f"{field_name} is not a number: {value!r}") from None
    if not math.isfinite(number):
        raise InvalidCoordinates(f"{field_name} must be finite")
    return number
