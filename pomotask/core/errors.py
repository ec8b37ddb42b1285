"""Domain errors raised by the task services.

The command layer catches these and turns them into failed results, so they
never reach the HTTP layer as exceptions.
"""


class TaskError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskError):
    """A lifecycle precondition does not hold."""
    kind = "validation"


class TaskNotFoundError(TaskError):
    kind = "not_found"

    def __init__(self, task_id: int):
        super().__init__("task not found")
        self.task_id = task_id


# Messages renvoyés tels quels à l'appelant
TASK_ALREADY_ACTIVE = "task already active"
ONLY_ONE_RUNNING = "only one task may run at a time"
NO_ACTIVE_SESSION = "no active session to pause"
TASK_NOT_PAUSED = "task is not paused"
ALREADY_HAS_SESSION = "task already has an active session"
