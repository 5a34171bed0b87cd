from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..core.enums import ClockAction, ClockState
from ..core.exceptions import InvalidTransition
from .model import AttendanceRecord
from .strategies.base import ClockTransition
from .strategies.break_strategy import BreakEndTransition, BreakStartTransition
from .strategies.check_in_strategy import CheckInTransition
from .strategies.check_out_strategy import CheckOutTransition


def _default_table() -> Dict[Tuple[ClockState, ClockAction], ClockTransition]:
    transitions = (CheckInTransition(), BreakStartTransition(), BreakEndTransition(), CheckOutTransition())
    return {(t.source, t.action): t for t in transitions}


@dataclass
class ClockTransitionFactory:
    """Factory Pattern: closed transition table, (state, action) -> strategy.

    Any pair not in the table is rejected with InvalidTransition.
    """

    table: Dict[Tuple[ClockState, ClockAction], ClockTransition] = field(default_factory=_default_table)

    def for_action(
        self,
        *,
        state: ClockState,
        action: ClockAction,
        record: Optional[AttendanceRecord],
    ) -> ClockTransition:
        if state == ClockState.DONE:
            raise InvalidTransition(state, action, "Already checked out today")

        transition = self.table.get((state, action))
        if transition is None:
            if action == ClockAction.CHECK_IN:
                raise InvalidTransition(state, action, "Already checked in today")
            raise InvalidTransition(state, action)

        # Only one break per day.
        if action == ClockAction.BREAK_START and record is not None and record.break_end_time is not None:
            raise InvalidTransition(state, action, "Break already taken today")

        return transition

    def allowed_actions(self, state: ClockState, record: Optional[AttendanceRecord] = None) -> list[ClockAction]:
        allowed = []
        for (source, action) in self.table:
            if source != state:
                continue
            try:
                self.for_action(state=state, action=action, record=record)
            except InvalidTransition:
                continue
            allowed.append(action)
        return allowed
