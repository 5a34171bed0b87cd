from __future__ import annotations

import pytest

from src.store_attendance.store_attendance.attendance.memory_attendance_repository import InMemoryAttendanceStore
from src.store_attendance.store_attendance.attendance.service import AttendanceEngine
from src.store_attendance.store_attendance.geolocation.model import Coordinates
from src.store_attendance.store_attendance.stores.memory_store_directory import InMemoryStoreDirectory

from support import STORE, north_of


@pytest.fixture
def stores() -> InMemoryStoreDirectory:
    directory = InMemoryStoreDirectory()
    directory.add_store(STORE)
    directory.assign("emp-1", STORE.store_id)
    directory.assign("emp-2", STORE.store_id)
    return directory


@pytest.fixture
def attendance_store() -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore()


@pytest.fixture
def engine(attendance_store, stores) -> AttendanceEngine:
    return AttendanceEngine(attendance_store, stores, geofence_radius_meters=100, timezone="UTC")


@pytest.fixture
def on_site() -> Coordinates:
    return north_of(STORE, 50)
