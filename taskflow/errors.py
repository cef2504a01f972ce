class TaskflowError(Exception):
    """Base class for errors raised by the task service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskflowError):
    """Required input is missing or malformed. The caller must fix the request."""


class NotFoundError(TaskflowError):
    """The referenced task does not exist."""

    def __init__(self, task_id: int, message: str = "Task not found."):
        super().__init__(message)
        self.task_id = task_id


class StoreError(TaskflowError):
    """The store failed. ``message`` is safe to show; the cause is only logged."""
