"""
Authentication module exceptions.

These exceptions are raised by the auth module and rendered by the API
error handlers. Every authentication failure is a 401 of type
``NotAuthenticated``; only the message and code tell them apart.
"""

from shared.exceptions import AuthenticationError, NotFoundError


class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown email or a wrong password (deliberately indistinguishable)."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user doesn't exist in the database."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
