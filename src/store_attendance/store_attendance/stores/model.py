from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geolocation.model import Coordinates


@dataclass(frozen=True)
class StoreLocation:
    """Registered position of a store (owned by store management, read-only here)."""

    store_id: str
    latitude: float
    longitude: float
    name: Optional[str] = None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)
