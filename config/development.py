import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = Config.db_config()

GEOFENCE_RADIUS_METERS = Config.GEOFENCE_RADIUS_METERS
ATTENDANCE_TIMEZONE = Config.ATTENDANCE_TIMEZONE

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed a demo store and employee on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB
