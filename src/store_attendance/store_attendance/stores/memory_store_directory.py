from __future__ import annotations

from typing import Dict, Optional

from .model import StoreLocation
from .repository import StoreDirectory


class InMemoryStoreDirectory(StoreDirectory):
    def __init__(self, stores: Optional[Dict[str, StoreLocation]] = None, assignments: Optional[Dict[str, str]] = None):
        self._stores: Dict[str, StoreLocation] = dict(stores or {})
        self._assignments: Dict[str, str] = dict(assignments or {})

    def add_store(self, store: StoreLocation) -> None:
        self._stores[store.store_id] = store

    def assign(self, employee_id: str, store_id: Optional[str]) -> None:
        if store_id is None:
            self._assignments.pop(employee_id, None)
        else:
            self._assignments[employee_id] = store_id

    def get_assigned_store(self, employee_id: str) -> Optional[StoreLocation]:
        store_id = self._assignments.get(employee_id)
        if store_id is None:
            return None
        return self._stores.get(store_id)
