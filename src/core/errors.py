"""Error taxonomy shared by validation, auth, storage and the HTTP layer."""
from enum import Enum


class ErrorKind(Enum):
    """
    Category of a failed request.

    Status codes and category names are attached in api.responses, nowhere else.
    """

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"


class ApiError(Exception):
    """Base class for errors that terminate a request."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    """Raised when client input is malformed or out of range."""

    kind = ErrorKind.VALIDATION


class AuthenticationError(ApiError):
    """Raised when the API key header is missing or incorrect."""

    kind = ErrorKind.AUTHENTICATION


class ConfigurationError(ApiError):
    """Raised when the server is missing required configuration (e.g. the API key)."""

    kind = ErrorKind.INTERNAL


class StorageError(ApiError):
    """Raised when the bookmark table rejects a read or write."""

    kind = ErrorKind.INTERNAL
