"""API route blueprints."""

from kanban.routes.health import health_bp
from kanban.routes.tasks import tasks_bp


__all__ = ["health_bp", "tasks_bp"]
