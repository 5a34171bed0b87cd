"""Example: drive the attendance engine directly (no Flask).

Controllers are a thin layer; the clock rules live in AttendanceEngine.
"""

from datetime import datetime, timezone

from src.store_attendance.store_attendance.container import build_container
from src.store_attendance.store_attendance.geolocation.model import Coordinates
from src.store_attendance.store_attendance.stores.memory_store_directory import InMemoryStoreDirectory
from src.store_attendance.store_attendance.stores.model import StoreLocation


def main():
    stores = InMemoryStoreDirectory()
    stores.add_store(StoreLocation(store_id="paris-01", latitude=48.8566, longitude=2.3522, name="Paris Centre"))
    stores.assign("emp-1", "paris-01")

    container = build_container(db_config=None, store_directory=stores)
    engine = container.attendance_engine

    here = Coordinates(latitude=48.8567, longitude=2.3523)
    day = datetime(2026, 3, 2, tzinfo=timezone.utc)
    for hour, action in ((9, "check_in"), (12, "break_start"), (13, "break_end"), (18, "check_out")):
        engine.submit_action("emp-1", action, here, now=day.replace(hour=hour))

    print(engine.get_current_state("emp-1", now=day.replace(hour=19)).as_dict())
    print(engine.get_history_ui("emp-1", limit=5))


if __name__ == "__main__":
    main()
