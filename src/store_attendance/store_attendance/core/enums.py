from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role as provided by the external auth service."""

    ADMIN = "admin"
    EMPLOYEE = "employe"


class ClockState(str, Enum):
    """Daily clock state, always derived from the day's record."""

    ABSENT = "ABSENT"
    PRESENT = "PRESENT"
    ON_BREAK = "ON_BREAK"
    DONE = "DONE"


class ClockAction(str, Enum):
    CHECK_IN = "check_in"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    CHECK_OUT = "check_out"
