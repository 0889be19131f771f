"""
Base exception classes for the Storefront backend.

Each module should define its own exceptions that inherit from these bases.
Every failure that reaches a client is one of these (or is rendered as a
``ServerError`` by the error handlers), so the error envelope stays uniform.
"""

import traceback
from datetime import datetime, timezone
from typing import Optional, Any

import pydantic


class StorefrontError(Exception):
    """
    Base exception for all Storefront errors.

    All custom exceptions should inherit from this class. Subclasses set
    ``status_code`` and ``error_type`` as class attributes; both can be
    overridden per instance.
    """

    status_code: int = 500
    error_type: str = "ServerError"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or self.status_code
        self.details = details or {}
        self.error_type = error_type or self.error_type
        self.code = code
        self.timestamp = datetime.now(timezone.utc).isoformat()
        # Always set; nothing branches on it.
        self.is_operational = True

    def to_dict(self, include_stack: bool = False) -> dict[str, Any]:
        """Convert exception to a plain dictionary for logging."""
        data: dict[str, Any] = {
            "message": self.message,
            "statusCode": self.status_code,
            "type": self.error_type,
            "code": self.code,
            "details": self.details,
            "timestamp": self.timestamp,
        }
        if include_stack and self.__traceback__ is not None:
            data["stack"] = format_stack(self)
        return data


class ValidationError(StorefrontError):
    """Input validation failed."""

    status_code = 400
    error_type = "ValidationError"

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        """Join every pydantic error message into a single comma-separated one."""
        return cls(join_error_messages(exc.errors()))


class DuplicateFieldError(StorefrontError):
    """A value that must be unique is already taken."""

    status_code = 400
    error_type = "DuplicateField"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"{field} is already registered",
            details={"field": field},
            code="DUPLICATE_FIELD",
        )
        self.field = field


class AuthenticationError(StorefrontError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401
    error_type = "NotAuthenticated"


class NotFoundError(StorefrontError):
    """Resource not found."""

    status_code = 404
    error_type = "NotFound"


class ExternalServiceError(StorefrontError):
    """Error communicating with an external service."""

    status_code = 502
    error_type = "ExternalServiceError"

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, details=details, code=code)
        self.service = service
        self.details["service"] = service


def format_stack(exc: BaseException) -> str:
    """Render an exception's traceback the way it would be printed."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def join_error_messages(errors: list[dict[str, Any]]) -> str:
    """
    Flatten pydantic-style error dicts into one message.

    Errors raised with ``PydanticCustomError`` carry a ready-made message;
    built-in ones are prefixed with the offending field.
    """
    messages = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        if error.get("type", "").startswith("storefront_") or not location:
            messages.append(message)
        else:
            messages.append(f"{'.'.join(location)}: {message}")
    return ", ".join(messages)
