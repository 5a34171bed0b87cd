from __future__ import annotations

from typing import Optional, Protocol

from .model import StoreLocation


class StoreDirectory(Protocol):
    """Lookup of an employee's assigned store.

    Note (DIP): the attendance engine depends on this interface, not on a
    concrete DB. Returns None when the employee has no assignment.
    """

    def get_assigned_store(self, employee_id: str) -> Optional[StoreLocation]:
        raise NotImplementedError
