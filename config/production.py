import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = Config.db_config()

GEOFENCE_RADIUS_METERS = Config.GEOFENCE_RADIUS_METERS
ATTENDANCE_TIMEZONE = Config.ATTENDANCE_TIMEZONE

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
