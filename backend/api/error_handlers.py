"""
FastAPI exception handlers.

These handlers are the only code that writes an error response. Each one
turns what was raised into an exception of the application taxonomy (or
passes it through unchanged) and delegates to build_error_response.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.error_response import build_error_response
from shared.exceptions import StorefrontError, ValidationError, join_error_messages

logger = logging.getLogger(__name__)

# Error type reported for framework-raised HTTP errors
HTTP_ERROR_TYPES = {
    400: "ValidationError",
    401: "NotAuthenticated",
    404: "NotFound",
    422: "ValidationError",
}


def _log(request: Request, status_code: int, exc: BaseException) -> None:
    if status_code >= 500:
        logger.error(
            "%s %s failed with %d",
            request.method,
            request.url.path,
            status_code,
            exc_info=exc,
        )
    else:
        logger.info(
            "%s %s rejected with %d: %s",
            request.method,
            request.url.path,
            status_code,
            getattr(exc, "message", exc),
        )


def register_exception_handlers(app: FastAPI, include_stack: bool = False) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Args:
        app: The application
        include_stack: Disclose stack traces (development configuration only)
    """

    def render(request: Request, exc: BaseException, headers: dict | None = None) -> JSONResponse:
        status_code, body = build_error_response(exc, include_stack=include_stack)
        _log(request, status_code, exc)
        if status_code == 401:
            headers = {**(headers or {}), "WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=status_code, content=body, headers=headers)

    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        return render(request, exc)

    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(join_error_messages(list(exc.errors())))
        return render(request, error)

    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        error = StorefrontError(
            message,
            status_code=exc.status_code,
            error_type=HTTP_ERROR_TYPES.get(exc.status_code),
        )
        return render(request, error, headers=getattr(exc, "headers", None))

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return render(request, exc)

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
