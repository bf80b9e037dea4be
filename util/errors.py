# util/errors.py
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage) -> "AppError":
        return cls(error.value.message, error.value.http_status)


class InvalidPathError(AppError):
    # Single kind for every namespace-escape attempt; the rule that fired is never exposed.
    def __init__(self) -> None:
        super().__init__(
            ErrorMessage.INVALID_PATH.value.message,
            ErrorMessage.INVALID_PATH.value.http_status,
        )


class BackendUnavailableError(AppError):
    def __init__(self, operation: str, key: str, reason: str = "") -> None:
        super().__init__(
            ErrorMessage.BACKEND_UNAVAILABLE.value.message,
            ErrorMessage.BACKEND_UNAVAILABLE.value.http_status,
        )
        self.operation = operation
        self.key = key
        self.reason = reason
