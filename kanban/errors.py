"""Error handlers with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify
from opentelemetry import trace

from kanban.exceptions import TaskError


logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int, **extra) -> tuple:
    """Create error response with trace context.

    Use this function in routes instead of returning jsonify directly.

    Args:
        message: Error message.
        status_code: HTTP status code.
        **extra: Additional members for the error body, e.g. ``fields``.

    Returns:
        Tuple of (response, status_code).
    """
    response = {"error": message, **extra}

    # Add trace ID for debugging
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")

    return jsonify(response), status_code


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(TaskError)
    def task_error(error: TaskError):
        if error.status_code >= 500:
            logger.error(f"Task operation failed: {error.message}")
        return error_response(error.message, error.status_code)

    @app.errorhandler(400)
    def bad_request(error):
        return error_response("Bad request", 400)

    @app.errorhandler(404)
    def not_found(error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error):
        return error_response("Internal server error", 500)
