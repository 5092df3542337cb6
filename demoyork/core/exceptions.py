"""Custom exception classes for the DemoYork API."""

from fastapi import status


class DemoYorkError(Exception):
    """Base exception for DemoYork. Each subclass maps to one HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(DemoYorkError):
    """Raised when sign-in credentials are wrong or no session was sent."""
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidSession(AuthenticationError):
    """Raised when a session token fails signature or shape verification."""


class ExpiredSession(AuthenticationError):
    """Raised when a session token is past its expiry."""


class UnknownUser(AuthenticationError):
    """Raised when a valid session names a user that no longer exists."""


class Forbidden(DemoYorkError):
    """Raised when the resolved role does not satisfy a requirement."""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Insufficient permissions", reason: str | None = None):
        self.reason = reason
        super().__init__(message)


class ResourceNotFoundError(DemoYorkError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(DemoYorkError):
    """Raised when a resource already exists."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "Resource already exists", field: str | None = None):
        self.field = field
        super().__init__(message)


class ValidationError(DemoYorkError):
    """Raised when input validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST


class DataIntegrityError(DemoYorkError):
    """Raised when a stored reference dangles (e.g. a user's role is missing)."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ClientDisconnected(DemoYorkError):
    """Raised when the client goes away before the request finished."""
    status_code = 499
