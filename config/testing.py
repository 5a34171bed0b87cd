SECRET_KEY = "test-secret"

# In-memory backends: tests never need a MySQL server.
DB_CONFIG = None

GEOFENCE_RADIUS_METERS = 100.0
ATTENDANCE_TIMEZONE = "UTC"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
