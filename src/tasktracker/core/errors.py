"""Task error taxonomy shared by every layer."""


class TaskError(Exception):
    """Base class for task tracker errors."""

    pass


class ValidationError(TaskError, ValueError):
    """Raised when input cannot be turned into a valid task or query."""

    pass


class NotFoundError(TaskError, LookupError):
    """Raised when an operation targets a task id that does not exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class StoreIOError(TaskError, OSError):
    """Raised when the task store cannot be read or written."""

    pass
