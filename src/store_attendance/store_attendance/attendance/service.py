from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence, Union

from ..common.datetime_utils import get_zone, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE, GEOFENCE_RADIUS_METERS
from ..core.enums import ClockAction, ClockState
from ..core.exceptions import (
    ConflictError,
    InvalidCoordinates,
    InvalidTransition,
    NoStoreAssigned,
    OutOfRange,
    ValidationError,
)
from ..geolocation.model import Coordinates
from ..geolocation.verifier import check_geofence
from ..stores.repository import StoreDirectory
from .factory import ClockTransitionFactory
from .model import AttendanceRecord, AttendanceSnapshot, AttendanceSummary
from .repository import AttendanceStore
from .state import derive_state

logger = logging.getLogger(__name__)

_STATE_LABELS = {
    ClockState.ABSENT: "Absent",
    ClockState.PRESENT: "Present",
    ClockState.ON_BREAK: "On break",
    ClockState.DONE: "Checked out",
}


def _parse_action(action: Union[ClockAction, str]) -> ClockAction:
    try:
        return ClockAction(action)
    except ValueError:
        raise ValidationError(f"Unknown clock action: {action!r}") from None


class AttendanceEngine:
    """Daily clock-state machine per (employee, date).

    Holds no mutable state: every call reads the day's record, validates,
    and performs at most one conditional write.
    """

    def __init__(
        self,
        attendance: AttendanceStore,
        stores: StoreDirectory,
        *,
        transition_factory: ClockTransitionFactory | None = None,
        geofence_radius_meters: float = GEOFENCE_RADIUS_METERS,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
    ):
        self._attendance = attendance
        self._stores = stores
        self._factory = transition_factory or ClockTransitionFactory()
        self._radius = float(geofence_radius_meters)
        self._tz = get_zone(timezone)
        self._clock = clock or (lambda: now_local(self._tz))

    @property
    def geofence_radius_meters(self) -> float:
        return self._radius

    def _now(self, now: datetime | None) -> datetime:
        now = now or self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=self._tz)
        # Whole seconds: DATETIME columns keep no fraction.
        return now.astimezone(self._tz).replace(microsecond=0)

    def submit_action(
        self,
        employee_id: str,
        action: Union[ClockAction, str],
        coordinates: Coordinates,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        action = _parse_action(action)
        if not isinstance(coordinates, Coordinates):
            raise InvalidCoordinates("coordinates are required")
        location = Coordinates.of(coordinates.latitude, coordinates.longitude)

        store = self._stores.get_assigned_store(employee_id)
        if store is None:
            logger.info("Rejected %s for %s: no store assigned", action.value, employee_id)
            raise NoStoreAssigned(employee_id)

        try:
            store_position = Coordinates.of(store.latitude, store.longitude)
        except InvalidCoordinates:
            logger.warning("Rejected %s for %s: store %s has invalid coordinates", action.value, employee_id, store.store_id)
            raise NoStoreAssigned(employee_id) from None

        try:
            distance = check_geofence(location, store_position, self._radius)
        except OutOfRange as e:
            logger.info(
                "Rejected %s for %s: %.1fm from store %s (radius %.0fm)",
                action.value, employee_id, e.distance_meters, store.store_id, self._radius,
            )
            raise

        now = self._now(now)
        work_date = now.date()
        record = self._attendance.get_today_record(employee_id, work_date)
        state = derive_state(record)

        try:
            transition = self._factory.for_action(state=state, action=action, record=record)
        except InvalidTransition as e:
            logger.info("Rejected %s for %s on %s: %s", action.value, employee_id, work_date, e)
            raise

        latest = record.latest_timestamp() if record else None
        if latest is not None and now < latest:
            raise ValidationError(f"Clock reading {now.isoformat()} precedes last action at {latest.isoformat()}")

        updated = transition.apply(
            record,
            employee_id=employee_id,
            store=store,
            work_date=work_date,
            now=now,
            location=location,
        )

        expected_version = record.version if record else None
        try:
            stored = self._attendance.write_record(updated, expected_version)
        except ConflictError:
            logger.warning("Concurrent write on %s/%s during %s", employee_id, work_date, action.value)
            raise

        logger.info(
            "%s: %s -> %s for %s at store %s (%.1fm)",
            action.value, state.value, transition.target.value, employee_id, store.store_id, distance,
        )
        return stored

    def get_current_state(self, employee_id: str, *, now: datetime | None = None) -> AttendanceSnapshot:
        work_date = self._now(now).date()
        record = self._attendance.get_today_record(employee_id, work_date)
        state = derive_state(record)
        return AttendanceSnapshot(
            state=state,
            record=record,
            allowed_actions=tuple(self._factory.allowed_actions(state, record)),
        )

    def get_history_ui(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(employee_id, limit)
        return [self._to_ui(r) for r in rows]

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        store_id: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_records(work_date=work_date, store_id=store_id, employee_id=employee_id)

    @staticmethod
    def summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
        records = list(records)
        return AttendanceSummary(
            employee_count=len({r.employee_id for r in records}),
            store_count=len({r.store_id for r in records}),
            record_count=len(records),
        )

    def _to_ui(self, r: AttendanceRecord) -> dict:
        def _hm(value: Optional[datetime]) -> str:
            return value.astimezone(self._tz).strftime("%H:%M:%S") if value else "-"

        state = derive_state(r)
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "store_id": r.store_id,
            "check_in": _hm(r.check_in_time),
            "break_start": _hm(r.break_start_time),
            "break_end": _hm(r.break_end_time),
            "check_out": _hm(r.check_out_time),
            "break_minutes": r.break_duration_minutes if r.break_duration_minutes is not None else 0,
            "state": _STATE_LABELS.get(state, state.value),
        }
