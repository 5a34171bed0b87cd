from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import ClockTransitionFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceStore
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceEngine
from .core.constants import DEFAULT_TIMEZONE, GEOFENCE_RADIUS_METERS
from .database.connection import DatabaseConnection, DBConfig
from .stores.memory_store_directory import InMemoryStoreDirectory
from .stores.mysql_store_directory import MySQLStoreDirectory
from .stores.repository import StoreDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceStore
    store_directory: StoreDirectory

    attendance_engine: AttendanceEngine


def build_container(
    *,
    db_config: Optional[dict],
    geofence_radius_meters: float = GEOFENCE_RADIUS_METERS,
    timezone: str = DEFAULT_TIMEZONE,
    store_directory: Optional[StoreDirectory] = None,
) -> Container:
    """Wire repositories and the engine.

    ``db_config=None`` selects the in-memory adapters (tests, demos).
    """
    conn: Optional[DatabaseConnection] = None
    if db_config is None:
        attendance_repo: AttendanceStore = InMemoryAttendanceStore()
        stores: StoreDirectory = store_directory or InMemoryStoreDirectory()
    else:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        attendance_repo = MySQLAttendanceRepository(conn)
        stores = store_directory or MySQLStoreDirectory(conn)

    attendance_engine = AttendanceEngine(
        attendance_repo,
        stores,
        transition_factory=ClockTransitionFactory(),
        geofence_radius_meters=geofence_radius_meters,
        timezone=timezone,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        store_directory=stores,
        attendance_engine=attendance_engine,
    )
