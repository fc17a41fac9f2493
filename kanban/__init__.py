"""Kanban task tracker: Flask API over a relational task store."""

import logging

from flask import Flask

from kanban.extensions import db, ma
from kanban.telemetry import attach_log_handler, instrument_flask_app, setup_telemetry, telemetry_enabled


def create_app(config_class: type | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.
    """
    # Telemetry providers must exist before the app is instrumented
    if telemetry_enabled():
        setup_telemetry()

    app = Flask(__name__)

    if config_class is None:
        from kanban.config import Config

        config_class = Config
    app.config.from_object(config_class)

    if telemetry_enabled():
        instrument_flask_app(app)

    db.init_app(app)
    ma.init_app(app)

    from kanban.routes import health_bp, tasks_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(tasks_bp)

    from kanban.errors import register_error_handlers

    register_error_handlers(app)

    if telemetry_enabled():
        from kanban.middleware import register_metrics_middleware

        register_metrics_middleware(app)
        attach_log_handler()

    _configure_logging()

    # Schema migrations are out of scope; the table is created on startup
    with app.app_context():
        db.create_all()

    return app


def _configure_logging() -> None:
    """Configure logging for the application."""
    # Package loggers propagate to root, where the OTel handler sits
    logging.getLogger("kanban").setLevel(logging.DEBUG)
    logging.getLogger("kanban").propagate = True

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").propagate = False

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
