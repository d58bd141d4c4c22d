class TaskError(Exception):
    """Base class for task failures. Carries no transport details."""


class TaskValidationError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class TaskStorageError(TaskError):
    pass
