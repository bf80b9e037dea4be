# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    BAD_REQUEST = ErrorInfo("Bad request", status.HTTP_400_BAD_REQUEST)
    INVALID_PATH = ErrorInfo("Invalid file path", status.HTTP_400_BAD_REQUEST)
    UNAUTHORIZED = ErrorInfo("Unauthorized", status.HTTP_401_UNAUTHORIZED)
    INVALID_USERNAME = ErrorInfo("Invalid username", status.HTTP_403_FORBIDDEN)
    FILE_TYPE_NOT_ALLOWED = ErrorInfo(
        "File type not allowed", status.HTTP_403_FORBIDDEN
    )
    FILE_NOT_FOUND = ErrorInfo("File not found", status.HTTP_404_NOT_FOUND)
    MIGRATION_TOKEN_MISSING = ErrorInfo(
        "Migration token not found. Did you click 'Prepare migration' first?",
        status.HTTP_409_CONFLICT,
    )
    MIGRATION_TOKEN_INVALID = ErrorInfo(
        "Invalid migration token", status.HTTP_403_FORBIDDEN
    )
    UPLOAD_FAILED = ErrorInfo("Upload failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    DELETE_FAILED = ErrorInfo("Delete failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    STARTER_TEMPLATE_MISSING = ErrorInfo(
        "Starter template not found", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    STARTER_FAILED = ErrorInfo(
        "Failed to create starter page", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    MIGRATION_FAILED = ErrorInfo(
        "Migration failed", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    BACKEND_UNAVAILABLE = ErrorInfo(
        "Storage backend error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    IDENTITY_UNAVAILABLE = ErrorInfo(
        "Identity provider unavailable", status.HTTP_502_BAD_GATEWAY
    )
    LISTING_TIMEOUT = ErrorInfo("Listing timed out", status.HTTP_504_GATEWAY_TIMEOUT)
