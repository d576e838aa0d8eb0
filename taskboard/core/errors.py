class TaskBoardError(Exception):
    """Base error rendered as ``{"message": ...}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(TaskBoardError):
    status_code = 401


class ValidationError(TaskBoardError):
    status_code = 400


class NotFoundError(TaskBoardError):
    status_code = 404


class UnexpectedError(TaskBoardError):
    status_code = 500
