"""Custom exception classes for the photo portfolio service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_BLOB_STORAGE,
    ERROR_CODE_CORRUPT_RECORD,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_VALIDATION_FAILED,
)


class PortfolioServiceError(Exception):
    """
    Base exception for all photo portfolio errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(PortfolioServiceError):
    """Raised when a request body or upload is malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UnauthorizedError(PortfolioServiceError):
    """Raised when the bearer token is missing or does not match."""

    def __init__(
        self,
        *,
        message: str = "Unauthorized",
        error_code: str = ERROR_CODE_UNAUTHORIZED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(PortfolioServiceError):
    """Raised when a lookup key, or the primary key it points at, is absent."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreError(PortfolioServiceError):
    """Raised when a key-value store read, write or listing fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CorruptRecordError(StoreError):
    """Raised when a stored value exists but cannot be parsed as a photo record."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CORRUPT_RECORD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobStorageError(PortfolioServiceError):
    """Raised when an image object upload or removal fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_BLOB_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
