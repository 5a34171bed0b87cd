from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...core.enums import ClockAction, ClockState
from ...geolocation.model import Coordinates
from ...stores.model import StoreLocation
from ..model import AttendanceRecord
from .base import ClockTransition


class CheckOutTransition(ClockTransition):
    """Last action of the day; the record is terminal afterwards."""

    source = ClockState.PRESENT
    action = ClockAction.CHECK_OUT
    target = ClockState.DONE

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
        return replace(record, check_out_time=now, check_out_location=location)
