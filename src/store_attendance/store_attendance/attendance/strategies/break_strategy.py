from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import whole_minutes
from ...core.enums import ClockAction, ClockState
from ...geolocation.model import Coordinates
from ...stores.model import StoreLocation
from ..model import AttendanceRecord
from .base import ClockTransition


class BreakStartTransition(ClockTransition):
    source = ClockState.PRESENT
    action = ClockAction.BREAK_START
    target = ClockState.ON_BREAK

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
        return replace(record, break_start_time=now)


class BreakEndTransition(ClockTransition):
    """Closes the break; the duration is fixed here and never recomputed."""

    source = ClockState.ON_BREAK
    action = ClockAction.BREAK_END
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
        return replace(
            record,
            break_end_time=now,
            break_duration_minutes=whole_minutes(record.break_start_time, now),
        )
