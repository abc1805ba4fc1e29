"""Errors raised by the records side of the portal.

Everything derives from DomainException, which carries a stable ErrorCode
the CLI or an embedding UI can show next to the message.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for portal clients."""

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_RATING = "INVALID_RATING"

    # Access
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"

    # Lookup
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    HELP_REQUEST_NOT_FOUND = "HELP_REQUEST_NOT_FOUND"

    # Backend
    BACKEND_ERROR = "BACKEND_ERROR"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    MISSING_COLUMN = "MISSING_COLUMN"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all records-related errors.

    Attributes
    ----------
    message
        Text that may be shown to the person using the portal
    code
        Machine-readable reason
    details
        Extra context for logs
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when user input is rejected before reaching the backend."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested record cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NotAuthenticatedError(DomainException):
    """Raised when an anonymous actor attempts a signed-in action."""

    def __init__(self, message: str = "Please sign in to continue") -> None:
        super().__init__(message, ErrorCode.NOT_AUTHENTICATED)


class AdminRequiredError(DomainException):
    """Raised when a non-admin actor attempts an admin action."""

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message, ErrorCode.ADMIN_REQUIRED)


class RowStoreError(DomainException):
    """Raised when the hosted backend rejects a row operation.

    ``backend_code`` is the backend's own code (a Postgres SQLSTATE such as
    ``42703`` or a PostgREST code such as ``PGRST204``).
    """

    def __init__(
        self,
        message: str,
        backend_code: str | None = None,
        code: ErrorCode = ErrorCode.BACKEND_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.backend_code = backend_code
        super().__init__(message, code, details)


class MissingColumnError(RowStoreError):
    """Raised when a query references a column the table doesn't have."""

    def __init__(
        self,
        message: str,
        backend_code: str | None = None,
        column: str | None = None,
    ) -> None:
        self.column = column
        super().__init__(
            message,
            backend_code=backend_code,
            code=ErrorCode.MISSING_COLUMN,
            details={"column": column} if column else None,
        )


class BackendUnavailableError(RowStoreError):
    """Raised when the hosted backend cannot be reached."""

    def __init__(self, message: str = "Portal backend unavailable") -> None:
        super().__init__(message, code=ErrorCode.BACKEND_UNAVAILABLE)
