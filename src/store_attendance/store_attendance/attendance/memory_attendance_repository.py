from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

from ..core.exceptions import ConflictError
from .model import AttendanceRecord
from .repository import AttendanceStore


class InMemoryAttendanceStore(AttendanceStore):
    """Process-local store; a lock makes the compare-and-set atomic."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: Dict[Tuple[str, date], AttendanceRecord] = {}
        self.write_count = 0

    def get_today_record(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_key.get((employee_id, work_date))

    def write_record(self, record: AttendanceRecord, expected_version: Optional[int]) -> AttendanceRecord:
        with self._lock:
            current = self._by_key.get(record.key)
            current_version = current.version if current else None
            if current_version != expected_version:
                raise ConflictError(record.employee_id, record.work_date)

            stored = replace(record, version=(expected_version or 0) + 1)
            self._by_key[record.key] = stored
            self.write_count += 1
            return stored

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[: int(limit)]

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        store_id: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = list(self._by_key.values())
        if work_date is not None:
            items = [r for r in items if r.work_date == work_date]
        if store_id is not None:
            items = [r for r in items if r.store_id == store_id]
        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        items.sort(key=lambda r: r.employee_id)
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items
