from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import InvalidCoordinates
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, driver_errors, fetchone
from ..geolocation.model import Coordinates
from .model import StoreLocation
from .repository import StoreDirectory

logger = logging.getLogger(__name__)


class MySQLStoreDirectory(StoreDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_assigned_store(self, employee_id: str) -> Optional[StoreLocation]:
        with driver_errors("store lookup"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.store_id, s.store_name, s.latitude, s.longitude
                FROM employees e
                JOIN stores s ON s.store_id = e.store_id
                WHERE e.employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)

        if not r or r.get("latitude") is None or r.get("longitude") is None:
            return None
        try:
            position = Coordinates.of(r["latitude"], r["longitude"])
        except InvalidCoordinates:
            # Unusable store position counts as no assignment.
            logger.warning("Store %s has invalid coordinates (%s, %s)", r["store_id"], r["latitude"], r["longitude"])
            return None
        return StoreLocation(
            store_id=str(r["store_id"]),
            latitude=position.latitude,
            longitude=position.longitude,
            name=r.get("store_name"),
        )
