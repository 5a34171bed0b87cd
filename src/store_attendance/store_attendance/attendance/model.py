from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import ClockAction, ClockState
from ..geolocation.model import Coordinates


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's clock record for one calendar day.

    Identity is (employee_id, work_date). ``version`` is 0 until the record
    has been stored once; the store bumps it on every successful write.
    """

    employee_id: str
    store_id: str
    work_date: date
    check_in_time: Optional[datetime] = None
    break_start_time: Optional[datetime] = None
    break_end_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    break_duration_minutes: Optional[int] = None
    check_in_location: Optional[Coordinates] = None
    check_out_location: Optional[Coordinates] = None
    version: int = 0

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)

    def latest_timestamp(self) -> Optional[datetime]:
        stamps = [
            t
            for t in (self.check_in_time, self.break_start_time, self.break_end_time, self.check_out_time)
            if t is not None
        ]
        return max(stamps) if stamps else None

    def as_dict(self) -> dict:
        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            "employee_id": self.employee_id,
            "store_id": self.store_id,
            "work_date": self.work_date.isoformat(),
            "check_in_time": _iso(self.check_in_time),
            "break_start_time": _iso(self.break_start_time),
            "break_end_time": _iso(self.break_end_time),
            "check_out_time": _iso(self.check_out_time),
            "break_duration_minutes": self.break_duration_minutes,
            "check_in_location": self.check_in_location.as_dict() if self.check_in_location else None,
            "check_out_location": self.check_out_location.as_dict() if self.check_out_location else None,
            "version": self.version,
        }


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Read-model: derived state plus today's record (if any)."""

    state: ClockState
    record: Optional[AttendanceRecord]
    allowed_actions: Tuple[ClockAction, ...] = ()

    def as_dict(self) -> dict:
        return {
            "state": self.state.value,
            "record": self.record.as_dict() if self.record else None,
            "allowed_actions": [a.value for a in self.allowed_actions],
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Aggregates shown above the admin presence listing."""

    employee_count: int
    store_count: int
    record_count: int
