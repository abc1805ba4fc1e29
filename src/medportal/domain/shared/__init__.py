from medportal.domain.shared.exceptions import (
    AdminRequiredError,
    BackendUnavailableError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    MissingColumnError,
    NotAuthenticatedError,
    RowStoreError,
    ValidationError,
)
from medportal.domain.shared.time import parse_timestamp, utc_now

__all__ = [
    "AdminRequiredError",
    "BackendUnavailableError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "MissingColumnError",
    "NotAuthenticatedError",
    "RowStoreError",
    "ValidationError",
    "parse_timestamp",
    "utc_now",
]
