from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Role
from ..core.exceptions import (
    ConflictError,
    DomainError,
    InvalidCoordinates,
    InvalidTransition,
    NoStoreAssigned,
    OutOfRange,
    StoreUnavailable,
    ValidationError,
)
from ..container import Container
from ..geolocation.model import Coordinates

logger = logging.getLogger(__name__)


def error_response(e: DomainError):
    """Map a domain error to (json, status)."""
    body: dict = {"success": False, "error": type(e).__name__, "message": str(e)}

    if isinstance(e, OutOfRange):
        body["distance_meters"] = round(e.distance_meters, 2)
        body["radius_meters"] = e.radius_meters
        return jsonify(body), 422
    if isinstance(e, NoStoreAssigned):
        return jsonify(body), 403
    if isinstance(e, InvalidTransition):
        body["state"] = getattr(e.state, "value", e.state)
        body["action"] = getattr(e.action, "value", e.action)
        return jsonify(body), 409
    if isinstance(e, ConflictError):
        body["retry"] = True
        return jsonify(body), 409
    if isinstance(e, StoreUnavailable):
        body["retry"] = True
        return jsonify(body), 503
    if isinstance(e, (InvalidCoordinates, ValidationError)):
        return jsonify(body), 400
    return jsonify(body), 400


def register(app: Flask, container: Container) -> None:
    engine = container.attendance_engine

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/attendance/<action>", methods=["POST"], endpoint="api_attendance_action")
    @login_required
    def api_attendance_action(action: str):
        data = request.get_json(silent=True) or {}
        try:
            coordinates = Coordinates.of(data.get("latitude"), data.get("longitude"))
            record = engine.submit_action(str(session["user_id"]), action, coordinates)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Clock action %s failed", action)
            return jsonify({"success": False, "message": "System error while recording attendance"}), 500
        return jsonify({"success": True, "record": record.as_dict()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def api_attendance_today():
        snapshot = engine.get_current_state(str(session["user_id"]))
        return jsonify({"success": True, **snapshot.as_dict()})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @login_required
    def api_attendance_history():
        limit = request.args.get("limit", default=10, type=int)
        rows = engine.get_history_ui(str(session["user_id"]), limit=max(1, min(limit, 100)))
        return jsonify({"success": True, "rows": rows})

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="api_admin_attendance")
    @admin_required
    def api_admin_attendance():
        raw_date = (request.args.get("date") or "").strip()
        try:
            work_date = parse_iso_date(raw_date) if raw_date else None
        except ValueError:
            return jsonify({"success": False, "message": f"Invalid date: {raw_date}"}), 400

        records = engine.list_records(
            work_date=work_date,
            store_id=request.args.get("store_id") or None,
            employee_id=request.args.get("employee_id") or None,
        )
        summary = engine.summarize(records)
        return jsonify(
            {
                "success": True,
                "records": [r.as_dict() for r in records],
                "summary": {
                    "employees": summary.employee_count,
                    "stores": summary.store_count,
                    "records": summary.record_count,
                },
            }
        )
