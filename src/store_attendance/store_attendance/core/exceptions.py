from __future__ import annotations

from datetime import date


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCoordinates(ValidationError):
    """Raised for non-finite or out-of-range latitude/longitude."""


class NoStoreAssigned(DomainError):
    """Raised when the employee has no store to clock in at."""

    def __init__(self, employee_id: str):
        super().__init__(f"Employee {employee_id} has no assigned store")
        self.employee_id = employee_id


class OutOfRange(DomainError):
    """Raised when the reported position is outside the store geofence."""

    def __init__(self, distance_meters: float, radius_meters: float):
        super().__init__(
            f"Too far from the store ({round(distance_meters)}m). "
            f"You must be within {round(radius_meters)}m."
        )
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class InvalidTransition(DomainError):
    """Raised when the action is not legal from the current clock state."""

    def __init__(self, state, action, reason: str | None = None):
        state_value = getattr(state, "value", state)
        action_value = getattr(action, "value", action)
        super().__init__(reason or f"Cannot {action_value} while {state_value}")
        self.state = state
        self.action = action


class ConflictError(DomainError):
    """Raised when a concurrent write changed the record since it was read."""

    def __init__(self, employee_id: str, work_date: date):
        super().__init__(
            f"Attendance record for {employee_id} on {work_date.isoformat()} was modified concurrently"
        )
        self.employee_id = employee_id
        self.work_date = work_date


class StoreUnavailable(DomainError):
    """Raised when the backing database cannot serve a read or write."""

    def __init__(self, operation: str):
        super().__init__(f"Attendance storage unavailable during {operation}")
        self.operation = operation
