# backend/hsrecords/routes/system.py
"""
System health endpoints.

Both endpoints are public so load balancers and the setup screen can check
the database without a session.
"""

import time
from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

from ..extensions import db

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Run SELECT 1 against the application's engine.

    Returns dict with status and latency.
    """
    start_time = time.time()
    try:
        ok = db.session.execute(text("SELECT 1 AS ok")).scalar() == 1
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy" if ok else "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
        }
    except Exception as e:
        db.session.rollback()
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": str(e),
        }


@system_bp.get("/api/db/ping")
def db_ping():
    """Connectivity check: {"ok": bool}."""
    result = check_database_health()
    if result["status"] == "healthy":
        return jsonify({"ok": True})
    return jsonify({"ok": False, "error": result.get("error", "Database error")}), 500


@system_bp.get("/health")
def health():
    database = check_database_health()
    status = "healthy" if database["status"] == "healthy" else "unhealthy"
    return jsonify({"status": status, "database": database}), 200 if status == "healthy" else 503
