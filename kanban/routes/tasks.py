"""Task endpoints."""

import logging

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError as SchemaValidationError

from kanban.errors import error_response
from kanban.schemas import TaskCreateSchema, TaskMoveSchema, TaskSchema
from kanban.services import tasks as task_service


logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")


def _load_body(schema):
    """Validate the JSON body against ``schema``.

    Returns:
        Tuple of (data, error response). Exactly one is None.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None, error_response("Request body must be a JSON object", 400)

    try:
        return schema.load(payload), None
    except SchemaValidationError as err:
        field = next(iter(err.messages))
        message = f"{field}: {'; '.join(err.messages[field])}"
        return None, error_response(message, 400, fields=err.messages)


@tasks_bp.route("", methods=["GET"])
def list_tasks():
    """List all tasks in creation order.

    Returns:
        JSON array of tasks.
    """
    return jsonify(TaskSchema(many=True).dump(task_service.list_tasks()))


@tasks_bp.route("", methods=["POST"])
def create_task():
    """Create a task in the TODO column.

    Returns:
        JSON response with the created task and 201 status.
    """
    data, error = _load_body(TaskCreateSchema())
    if error:
        return error

    task = task_service.create_task(data["content"])
    return jsonify(TaskSchema().dump(task)), 201


@tasks_bp.route("/<task_id>", methods=["DELETE"])
def delete_task(task_id: str):
    """Delete a task.

    Returns:
        Empty response with 204 status.
    """
    task_service.remove_task(task_id)
    return "", 204


@tasks_bp.route("/<task_id>/move", methods=["PUT"])
def move_task(task_id: str):
    """Move a task to another column.

    Returns:
        JSON response with the updated task.
    """
    data, error = _load_body(TaskMoveSchema())
    if error:
        return error

    task = task_service.move_task(task_id, data["column"])
    return jsonify(TaskSchema().dump(task))
