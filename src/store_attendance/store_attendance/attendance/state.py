from __future__ import annotations

from typing import Optional

from ..core.enums import ClockState
from .model import AttendanceRecord


def derive_state(record: Optional[AttendanceRecord]) -> ClockState:
    """Derive the clock state from the day's record (pure, evaluated in order)."""
    if record is None or record.check_in_time is None:
        return ClockState.ABSENT
    if record.check_out_time is not None:
        return ClockState.DONE
    if record.break_start_time is not None and record.break_end_time is None:
        return ClockState.ON_BREAK
    return ClockState.PRESENT
