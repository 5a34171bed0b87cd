"""Store Attendance package.

Clock tracking for store employees (check-in, one break, check-out) with a
geofence check against the assigned store. Organized by feature modules
(attendance, stores, geolocation) with a thin Flask controller layer over
service/repository layers.
"""
