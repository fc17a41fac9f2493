"""Task error taxonomy mapped onto HTTP status codes."""


class TaskError(Exception):
    """Base class for errors raised by task operations."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Missing or invalid input."""

    status_code = 400


class NotFoundError(TaskError):
    """No task exists with the requested id."""

    status_code = 404


class StoreError(TaskError):
    """The backing store rejected the operation."""

    status_code = 500
