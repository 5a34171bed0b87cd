from __future__ import annotations

import math
from datetime import datetime, timezone

from src.store_attendance.store_attendance.geolocation.model import Coordinates
from src.store_attendance.store_attendance.stores.model import StoreLocation

# Length of one degree of latitude on the 6,371 km sphere.
METERS_PER_DEGREE_LAT = math.pi / 180 * 6_371_000

STORE = StoreLocation(store_id="paris-01", latitude=48.8566, longitude=2.3522, name="Paris Centre")


def north_of(store: StoreLocation, meters: float) -> Coordinates:
    return Coordinates(latitude=store.latitude + meters / METERS_PER_DEGREE_LAT, longitude=store.longitude)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, second, tzinfo=timezone.utc)
