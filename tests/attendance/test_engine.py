from __future__ import annotations

from datetime import date, datetime, timezone
from itertools import product

import pytest

from src.store_attendance.store_attendance.attendance.service import AttendanceEngine
from src.store_attendance.store_attendance.common.datetime_utils import whole_minutes
from src.store_attendance.store_attendance.core.enums import ClockAction, ClockState
from src.store_attendance.store_attendance.core.exceptions import (
    InvalidCoordinates,
    InvalidTransition,
    NoStoreAssigned,
    OutOfRange,
    ValidationError,
)
from src.store_attendance.store_attendance.geolocation.model import Coordinates
from src.store_attendance.store_attendance.stores.memory_store_directory import InMemoryStoreDirectory
from src.store_attendance.store_attendance.stores.model import StoreLocation

from support import STORE, at, north_of

DAY = date(2026, 3, 2)


def drive_to(engine, state: ClockState, coords: Coordinates, employee_id: str = "emp-1") -> None:
    steps = {
        ClockState.ABSENT: [],
        ClockState.PRESENT: [ClockAction.CHECK_IN],
        ClockState.ON_BREAK: [ClockAction.CHECK_IN, ClockAction.BREAK_START],
        ClockState.DONE: [ClockAction.CHECK_IN, ClockAction.CHECK_OUT],
    }[state]
    for i, action in enumerate(steps):
        engine.submit_action(employee_id, action, coords, now=at(9 + i))


def test_scenario_a_no_store_assigned(engine, attendance_store, on_site):
    with pytest.raises(NoStoreAssigned) as exc:
        engine.submit_action("nobody", ClockAction.CHECK_IN, on_site, now=at(9))

    assert exc.value.employee_id == "nobody"
    assert attendance_store.get_today_record("nobody", DAY) is None
    assert attendance_store.write_count == 0


def test_scenario_b_out_of_range(engine, attendance_store):
    far = north_of(STORE, 150)

    with pytest.raises(OutOfRange) as exc:
        engine.submit_action("emp-1", ClockAction.CHECK_IN, far, now=at(9))

    assert exc.value.distance_meters == pytest.approx(150, abs=0.01)
    assert exc.value.radius_meters == 100
    assert "150m" in str(exc.value)
    assert attendance_store.get_today_record("emp-1", DAY) is None
    assert attendance_store.write_count == 0


def test_scenario_c_full_day(engine, attendance_store, on_site):
    rec = engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    assert engine.get_current_state("emp-1", now=at(9, 1)).state == ClockState.PRESENT
    assert rec.check_in_location == on_site
    assert rec.version == 1

    engine.submit_action("emp-1", ClockAction.BREAK_START, on_site, now=at(12))
    assert engine.get_current_state("emp-1", now=at(12, 1)).state == ClockState.ON_BREAK

    rec = engine.submit_action("emp-1", ClockAction.BREAK_END, on_site, now=at(12, 45))
    assert engine.get_current_state("emp-1", now=at(12, 46)).state == ClockState.PRESENT
    assert rec.break_duration_minutes == 45

    rec = engine.submit_action("emp-1", ClockAction.CHECK_OUT, on_site, now=at(17, 30))
    assert engine.get_current_state("emp-1", now=at(17, 31)).state == ClockState.DONE
    assert rec.check_out_location == on_site
    assert rec.version == 4
    assert attendance_store.write_count == 4

    for action in ClockAction:
        with pytest.raises(InvalidTransition):
            engine.submit_action("emp-1", action, on_site, now=at(18))
    assert attendance_store.get_today_record("emp-1", DAY) == rec
    assert attendance_store.write_count == 4


def test_break_duration_seventeen_minutes(engine, on_site):
    engine.submit_action("emp-1", "check_in", on_site, now=at(8, 30))
    engine.submit_action("emp-1", "break_start", on_site, now=at(9, 0, 0))
    rec = engine.submit_action("emp-1", "break_end", on_site, now=at(9, 17, 0))

    assert rec.break_duration_minutes == 17


LEGAL = {
    (ClockState.ABSENT, ClockAction.CHECK_IN),
    (ClockState.PRESENT, ClockAction.BREAK_START),
    (ClockState.ON_BREAK, ClockAction.BREAK_END),
    (ClockState.PRESENT, ClockAction.CHECK_OUT),
}

ILLEGAL = sorted(set(product(ClockState, ClockAction)) - LEGAL, key=lambda pair: (pair[0].value, pair[1].value))


@pytest.mark.parametrize("state, action", ILLEGAL)
def test_illegal_pairs_leave_record_unchanged(engine, attendance_store, on_site, state, action):
    drive_to(engine, state, on_site)
    before = attendance_store.get_today_record("emp-1", DAY)
    writes = attendance_store.write_count

    with pytest.raises(InvalidTransition) as exc:
        engine.submit_action("emp-1", action, on_site, now=at(16))

    assert exc.value.state == state
    assert exc.value.action == action
    assert attendance_store.get_today_record("emp-1", DAY) == before
    assert attendance_store.write_count == writes


def test_second_check_in_same_day_rejected(engine, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    with pytest.raises(InvalidTransition, match="Already checked in"):
        engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9, 5))


def test_only_one_break_per_day(engine, attendance_store, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    engine.submit_action("emp-1", ClockAction.BREAK_START, on_site, now=at(11))
    engine.submit_action("emp-1", ClockAction.BREAK_END, on_site, now=at(11, 15))

    with pytest.raises(InvalidTransition, match="Break already taken"):
        engine.submit_action("emp-1", ClockAction.BREAK_START, on_site, now=at(14))
    assert attendance_store.write_count == 3


def test_geofence_is_checked_on_every_action(engine, attendance_store, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))

    with pytest.raises(OutOfRange):
        engine.submit_action("emp-1", ClockAction.CHECK_OUT, north_of(STORE, 101), now=at(17))
    assert engine.get_current_state("emp-1", now=at(17)).state == ClockState.PRESENT
    assert attendance_store.write_count == 1


def test_boundary_distance_is_accepted(engine):
    rec = engine.submit_action("emp-1", ClockAction.CHECK_IN, north_of(STORE, 99.9), now=at(9))
    assert rec.check_in_time == at(9)


def test_invalid_coordinates_rejected_before_lookup(engine, attendance_store):
    with pytest.raises(InvalidCoordinates):
        engine.submit_action("emp-1", ClockAction.CHECK_IN, Coordinates(latitude=float("nan"), longitude=2.0), now=at(9))
    with pytest.raises(InvalidCoordinates):
        engine.submit_action("nobody", ClockAction.CHECK_IN, Coordinates(latitude=95.0, longitude=2.0), now=at(9))
    assert attendance_store.write_count == 0


def test_unknown_action_rejected(engine, on_site):
    with pytest.raises(ValidationError, match="Unknown clock action"):
        engine.submit_action("emp-1", "lunch", on_site, now=at(9))


def test_clock_going_backwards_is_rejected(engine, attendance_store, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    with pytest.raises(ValidationError, match="precedes"):
        engine.submit_action("emp-1", ClockAction.CHECK_OUT, on_site, now=at(8))
    assert attendance_store.write_count == 1


def test_today_is_the_date_in_the_configured_zone(attendance_store, stores, on_site):
    engine = AttendanceEngine(attendance_store, stores, timezone="Asia/Tokyo")
    # 20:00 UTC on 2 March is 05:00 on 3 March in Tokyo.
    rec = engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=datetime(2026, 3, 2, 20, 0, tzinfo=timezone.utc))

    assert rec.work_date == date(2026, 3, 3)
    assert rec.check_in_time.utcoffset().total_seconds() == 9 * 3600


def test_new_day_starts_absent(engine, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    engine.submit_action("emp-1", ClockAction.CHECK_OUT, on_site, now=at(17))

    tomorrow = datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc)
    assert engine.get_current_state("emp-1", now=tomorrow).state == ClockState.ABSENT
    rec = engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=tomorrow)
    assert rec.work_date == date(2026, 3, 3)


def test_get_current_state_is_read_only_and_idempotent(engine, attendance_store, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    writes = attendance_store.write_count

    first = engine.get_current_state("emp-1", now=at(10))
    second = engine.get_current_state("emp-1", now=at(10))

    assert first == second
    assert first.state == ClockState.PRESENT
    assert first.allowed_actions == (ClockAction.BREAK_START, ClockAction.CHECK_OUT)
    assert attendance_store.write_count == writes


def test_history_and_admin_listing(engine, stores, on_site):
    engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    engine.submit_action("emp-2", ClockAction.CHECK_IN, on_site, now=at(9, 30))
    engine.submit_action("emp-1", ClockAction.CHECK_OUT, on_site, now=at(17))

    rows = engine.get_history_ui("emp-1", limit=5)
    assert rows == [
        {
            "date": "2026-03-02",
            "store_id": "paris-01",
            "check_in": "09:00:00",
            "break_start": "-",
            "break_end": "-",
            "check_out": "17:00:00",
            "break_minutes": 0,
            "state": "Checked out",
        }
    ]

    records = engine.list_records(work_date=DAY, store_id="paris-01")
    assert [r.employee_id for r in records] == ["emp-1", "emp-2"]
    assert engine.list_records(employee_id="emp-2")[0].check_out_time is None
    assert engine.list_records(store_id="elsewhere") == []

    summary = engine.summarize(records)
    assert (summary.employee_count, summary.store_count, summary.record_count) == (2, 1, 2)


def test_illegal_pairs_cover_the_rest_of_the_table():
    assert len(ILLEGAL) == len(ClockState) * len(ClockAction) - len(LEGAL)
    assert not LEGAL & set(ILLEGAL)


def test_missing_coordinates_are_invalid_coordinates(engine, attendance_store):
    with pytest.raises(InvalidCoordinates):
        engine.submit_action("emp-1", ClockAction.CHECK_IN, None, now=at(9))
    with pytest.raises(InvalidCoordinates):
        engine.submit_action("emp-1", ClockAction.CHECK_IN, (48.8566, 2.3522), now=at(9))
    assert attendance_store.write_count == 0


def test_store_with_invalid_coordinates_counts_as_unassigned(attendance_store, on_site):
    directory = InMemoryStoreDirectory()
    directory.add_store(StoreLocation(store_id="broken", latitude=123.0, longitude=2.3522))
    directory.assign("emp-1", "broken")
    engine = AttendanceEngine(attendance_store, directory, geofence_radius_meters=100, timezone="UTC")

    with pytest.raises(NoStoreAssigned):
        engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9))
    assert attendance_store.write_count == 0


def test_timestamps_are_whole_seconds(engine, on_site):
    rec = engine.submit_action("emp-1", ClockAction.CHECK_IN, on_site, now=at(9).replace(microsecond=750_000))

    assert rec.check_in_time == at(9)
    assert rec.check_in_time.microsecond == 0


def test_break_minutes_agree_with_stored_times(engine, on_site):
    engine.submit_action("emp-1", "check_in", on_site, now=at(8, 30))
    engine.submit_action("emp-1", "break_start", on_site, now=at(9, 0, 0).replace(microsecond=600_000))
    rec = engine.submit_action("emp-1", "break_end", on_site, now=at(9, 17, 0).replace(microsecond=400_000))

    assert (rec.break_start_time, rec.break_end_time) == (at(9, 0, 0), at(9, 17, 0))
    assert rec.break_duration_minutes == 17
    assert rec.break_duration_minutes == whole_minutes(rec.break_start_time, rec.break_end_time)


def test_actions_within_the_same_second_are_accepted(engine, attendance_store, on_site):
    engine.submit_action("emp-1", "check_in", on_site, now=at(9).replace(microsecond=900_000))
    rec = engine.submit_action("emp-1", "break_start", on_site, now=at(9).replace(microsecond=300_000))

    assert rec.check_in_time == rec.break_start_time == at(9)
    assert attendance_store.write_count == 2
