"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

GEOFENCE_RADIUS_METERS = 100.0
EARTH_RADIUS_METERS = 6_371_000.0
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_TIMEZONE = "UTC"
