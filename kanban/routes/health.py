"""Health check endpoint."""

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify


health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness probe.

    Returns:
        JSON response with status, current timestamp and service identity.
    """
    return jsonify(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": {
                "name": current_app.config["SERVICE_NAME"],
                "version": current_app.config["SERVICE_VERSION"],
            },
        }
    )
