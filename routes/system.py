"""System endpoints (health check)."""

from flask import Blueprint, current_app, jsonify

from middleware.errors import DatabaseConnectionError

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route reporting the database status."""
    connection = current_app.extensions.get("mongo_connection")
    if connection is None:
        db_status = "not configured"
    else:
        try:
            connection.ping()
            db_status = "ok"
        except DatabaseConnectionError as e:
            db_status = f"error: {e.details.get('reason', e.message)}"

    return jsonify({
        "status": "ok",
        "database": db_status,
    }), 200
