from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import from_naive_utc, to_naive_utc
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, driver_errors, fetchall, fetchone
from ..geolocation.model import Coordinates
from .model import AttendanceRecord
from .repository import AttendanceStore

_COLUMNS = """
    employee_id, store_id, work_date,
    check_in_time, break_start_time, break_end_time, check_out_time,
    break_duration_minutes,
    check_in_lat, check_in_lon, check_out_lat, check_out_lon,
    version
"""


def _coords(lat: Any, lon: Any) -> Optional[Coordinates]:
    if lat is None or lon is None:
        return None
    return Coordinates(latitude=float(lat), longitude=float(lon))


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=str(r["employee_id"]),
        store_id=str(r["store_id"]),
        work_date=r["work_date"],
        check_in_time=from_naive_utc(r.get("check_in_time")),
        break_start_time=from_naive_utc(r.get("break_start_time")),
        break_end_time=from_naive_utc(r.get("break_end_time")),
        check_out_time=from_naive_utc(r.get("check_out_time")),
        break_duration_minutes=(
            int(r["break_duration_minutes"]) if r.get("break_duration_minutes") is not None else None
        ),
        check_in_location=_coords(r.get("check_in_lat"), r.get("check_in_lon")),
        check_out_location=_coords(r.get("check_out_lat"), r.get("check_out_lon")),
        version=int(r["version"]),
    )


def _params(record: AttendanceRecord) -> tuple:
    cin, cout = record.check_in_location, record.check_out_location
    return (
        to_naive_utc(record.check_in_time),
        to_naive_utc(record.break_start_time),
        to_naive_utc(record.break_end_time),
        to_naive_utc(record.check_out_time),
        record.break_duration_minutes,
        cin.latitude if cin else None,
        cin.longitude if cin else None,
        cout.latitude if cout else None,
        cout.longitude if cout else None,
    )


class MySQLAttendanceRepository(AttendanceStore):
    """MySQL-backed store.

    Inserts rely on the UNIQUE (employee_id, work_date) key; updates are
    guarded by ``version``. Timestamps are stored as naive UTC DATETIMEs.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_today_record(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with driver_errors("read"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def write_record(self, record: AttendanceRecord, expected_version: Optional[int]) -> AttendanceRecord:
        if expected_version is None:
            return self._insert(record)
        return self._update(record, expected_version)

    def _insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with driver_errors("insert"):
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(
                        """
                        INSERT INTO attendance_records(
                            check_in_time, break_start_time, break_end_time, check_out_time,
                            break_duration_minutes,
                            check_in_lat, check_in_lon, check_out_lat, check_out_lon,
                            employee_id, store_id, work_date, version
                        )
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                        """,
                        _params(record) + (record.employee_id, record.store_id, record.work_date),
                    )
            except mysql.connector.IntegrityError as e:
                if e.errno == errorcode.ER_DUP_ENTRY:
                    raise ConflictError(record.employee_id, record.work_date) from e
                raise
        return replace(record, version=1)

    def _update(self, record: AttendanceRecord, expected_version: int) -> AttendanceRecord:
        with driver_errors("update"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, break_start_time=%s, break_end_time=%s, check_out_time=%s,
                    break_duration_minutes=%s,
                    check_in_lat=%s, check_in_lon=%s, check_out_lat=%s, check_out_lon=%s,
                    version=version + 1
                WHERE employee_id=%s AND work_date=%s AND version=%s
                """,
                _params(record) + (record.employee_id, record.work_date, int(expected_version)),
            )
            if cur.rowcount == 0:
                raise ConflictError(record.employee_id, record.work_date)
        return replace(record, version=int(expected_version) + 1)

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with driver_errors("history"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        store_id: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)
        if store_id is not None:
            clauses.append("store_id=%s")
            params.append(store_id)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with driver_errors("listing"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
