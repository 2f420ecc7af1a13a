"""Error taxonomy shared by the store, the service and the API layer."""


class TaskdeckError(Exception):
    """Base exception for Taskdeck."""

    status_code = 500
    code = "TASKDECK_ERROR"


class ValidationError(TaskdeckError):
    """Input failed a precondition (e.g. blank title)."""

    status_code = 422
    code = "VALIDATION_ERROR"


class NotFound(TaskdeckError):
    """Referenced task id does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, task_id: int):
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id


class StoreError(TaskdeckError):
    """Underlying persistence failure."""

    status_code = 500
    code = "STORE_ERROR"
