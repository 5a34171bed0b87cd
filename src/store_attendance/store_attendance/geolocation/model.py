from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_latitude, require_longitude


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @classmethod
    def of(cls, latitude, longitude) -> "Coordinates":
        """Build validated coordinates from raw (possibly string) input."""
        return cls(latitude=require_latitude(latitude), longitude=require_longitude(longitude))

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}
