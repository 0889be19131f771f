"""
Error response builder.

Single point of translation from any exception to the wire envelope:

    {"success": false,
     "error": {"message", "statusCode", "type", "timestamp",
               "code"?, "details"?, "stack"?}}

The builder is a pure function of the exception and the disclosure flag.
It never raises: it is the last stop of every error path.
"""

from datetime import datetime, timezone
from typing import Any

from .exceptions import StorefrontError, format_stack

DEFAULT_STATUS_CODE = 500
DEFAULT_ERROR_TYPE = "ServerError"
DEFAULT_MESSAGE = "Internal Server Error"

# Keys removed from ``details`` no matter how they got there
SENSITIVE_DETAIL_KEYS = frozenset({"password", "token"})


def sanitize_details(details: Any) -> dict[str, Any]:
    """Return a copy of ``details`` without sensitive keys."""
    if not isinstance(details, dict):
        return {}
    return {
        key: value
        for key, value in details.items()
        if key not in SENSITIVE_DETAIL_KEYS
    }


def _stack_for(exc: BaseException) -> str | None:
    explicit = getattr(exc, "stack", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    if exc.__traceback__ is not None:
        return format_stack(exc)
    return None


def _status_code_for(exc: BaseException) -> int:
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and 400 <= status_code <= 599:
        return status_code
    return DEFAULT_STATUS_CODE


def build_error_response(
    exc: BaseException,
    include_stack: bool = False,
) -> tuple[int, dict[str, Any]]:
    """
    Map an exception to an HTTP status code and error envelope.

    Application errors contribute all of their fields. Anything else gets
    the default envelope built from the fields it happens to expose.

    Args:
        exc: The exception to render
        include_stack: Whether to disclose the stack trace (development only)

    Returns:
        Tuple of (status code, JSON-serializable body)
    """
    try:
        if isinstance(exc, StorefrontError):
            status_code = exc.status_code
            error: dict[str, Any] = {
                "message": exc.message,
                "statusCode": status_code,
                "type": exc.error_type,
                "timestamp": exc.timestamp,
            }
            if exc.code:
                error["code"] = exc.code
            details = sanitize_details(exc.details)
            if details:
                error["details"] = details
        else:
            status_code = _status_code_for(exc)
            error = {
                "message": getattr(exc, "message", None) or str(exc) or DEFAULT_MESSAGE,
                "statusCode": status_code,
                "type": getattr(exc, "type", None) or DEFAULT_ERROR_TYPE,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

        if include_stack:
            stack = _stack_for(exc)
            if stack:
                error["stack"] = stack

        return status_code, {"success": False, "error": error}
    except Exception:
        # An exception with hostile attributes must still produce a response
        return DEFAULT_STATUS_CODE, {
            "success": False,
            "error": {
                "message": DEFAULT_MESSAGE,
                "statusCode": DEFAULT_STATUS_CODE,
                "type": DEFAULT_ERROR_TYPE,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        }
