"""Errors raised by the task service"""


class TaskServiceError(Exception):
    """Base class for task service failures"""


class TaskValidationError(TaskServiceError):
    """Malformed or missing required input"""


class TaskNotFoundError(TaskServiceError):
    """Referenced task does not exist"""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__("Task not found")


class TaskAccessDeniedError(TaskServiceError):
    """Task exists but the caller does not own it"""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__("Access denied")


class UserNotFoundError(TaskServiceError):
    """Caller identity has no persisted user record"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")
