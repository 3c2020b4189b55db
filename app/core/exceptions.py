from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class NotFoundError(AppException):
    """A record the caller asked for no longer exists."""

    def __init__(
        self,
        message: str = "Record not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        super().__init__(404, message, error_code)


class PersistenceError(AppException):
    """Storage failed mid-write. The message is safe to show to end users."""

    def __init__(
        self,
        message: str = "Failed to save. Please try again.",
        details: dict | None = None,
    ):
        super().__init__(500, message, ErrorCode.PERSISTENCE_ERROR, details)


class FormValidationError(AppException):
    """Submitted form data was rejected; ``details`` holds the form reply."""

    def __init__(
        self,
        details: dict,
        message: str = "Invalid form submission",
    ):
        super().__init__(422, message, ErrorCode.VALIDATION_ERROR, details)
