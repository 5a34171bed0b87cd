from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import ClockAction, ClockState
from ...geolocation.model import Coordinates
from ...stores.model import StoreLocation
from ..model import AttendanceRecord
from .base import ClockTransition


class CheckInTransition(ClockTransition):
    """First action of the day: creates the record."""

    source = ClockState.ABSENT
    action = ClockAction.CHECK_IN
    target = ClockState.PRESENT

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
        return AttendanceRecord(
            employee_id=employee_id,
            store_id=store.store_id,
            work_date=work_date,
            check_in_time=now,
            check_in_location=location,
            version=record.version if record else 0,
        )
