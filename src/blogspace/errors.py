from abc import ABC


class UserError(ABC, Exception):
    """Base class for errors reported back to the API client.

    Messages of UserError subclasses are returned verbatim in the
    response body, so they must not leak credentials or internals.
    """


class NotFoundError(UserError):
    """Raised when a blog, comment, category or user does not exist."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when credentials or the session token are invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when an authenticated user lacks permission for an action."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""
