"""Health check endpoint for container probes."""

from typing import Any

from flask import Blueprint, jsonify

from adminkit.database import check_db_connection

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"])
def health_check() -> Any:
    """Health check endpoint.

    Returns 200 when the database is accessible, 503 otherwise.
    """
    db_connected = check_db_connection()

    response = {
        "status": "healthy" if db_connected else "unhealthy",
        "database": "connected" if db_connected else "disconnected",
    }

    if not db_connected:
        response["error"] = "database not connected"

    return jsonify(response), 200 if db_connected else 503
