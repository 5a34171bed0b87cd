from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import ClassVar, Optional

from ...core.enums import ClockAction, ClockState
from ...geolocation.model import Coordinates
from ...stores.model import StoreLocation
from ..model import AttendanceRecord


class ClockTransition(ABC):
    """Strategy Pattern: one legal (state, action) edge of the daily clock machine."""

    source: ClassVar[ClockState]
    action: ClassVar[ClockAction]
    target: ClassVar[ClockState]

    @abstractmethod
    def apply(
        self,
        record: Optional[AttendanceRecord],
        *,
        employee_id: str,
        store: StoreLocation,
        work_date: date,
        now: datetime,
        location: Coordinates,
    ) -> AttendanceRecord:
        """Return the new record value; never writes."""
        raise NotImplementedError
