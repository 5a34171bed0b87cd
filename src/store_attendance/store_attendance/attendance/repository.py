from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceStore(Protocol):
    """Persistence of daily attendance records.

    ``write_record`` is a conditional write: with ``expected_version=None``
    the record must not exist yet; otherwise the stored version must equal
    ``expected_version``. On mismatch it raises ConflictError and stores
    nothing. Returns the stored record carrying its new version.
    """

    def get_today_record(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def write_record(self, record: AttendanceRecord, expected_version: Optional[int]) -> AttendanceRecord:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        store_id: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
