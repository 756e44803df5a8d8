"""
Exceptions for the Timeline application.

Every error raised on purpose by the application derives from
TimelineException so the API layer can map it to a response in one place.
"""

from typing import Any


class TimelineException(Exception):
    """
    Base exception for all Timeline application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code
        details: Additional error context (logged, never sent to clients)
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the API error body."""
        return {"error": self.message}


class ValidationException(TimelineException):
    """Raised when an upload request is missing required input."""

    def __init__(self, message: str = "Missing fields", fields: list[str] | None = None):
        details = {"fields": fields} if fields else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnexpectedFieldException(ValidationException):
    """Raised when a file slot receives more files than it accepts."""

    def __init__(self, field: str):
        super().__init__("Unexpected field", [field])
        self.error_code = "UNEXPECTED_FIELD"


# Storage Exceptions
class StorageException(TimelineException):
    """Base exception for storage operations."""

    def to_dict(self) -> dict[str, Any]:
        # Storage failures never leak filesystem detail to callers
        return {"error": "Internal Server Error"}


class StorageUploadError(StorageException):
    """Writing an uploaded image failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to store file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Target path escapes the storage root."""

    def __init__(self, file_path: str, operation: str):
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )


class TimelineWriteError(StorageException):
    """Rewriting the timeline file failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to write timeline: {file_path}",
            "TIMELINE_WRITE_ERROR",
            {"file_path": file_path, "reason": reason},
        )
