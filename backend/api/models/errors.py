"""
Error response models.

Document the error envelope in the OpenAPI schema. The envelope itself is
built by shared.error_response.build_error_response.
"""

from pydantic import BaseModel
from typing import Optional, Any


class ErrorBody(BaseModel):
    """Standard error body."""

    message: str
    statusCode: int
    type: str
    timestamp: str
    code: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    stack: Optional[str] = None  # development only


class ErrorEnvelope(BaseModel):
    """Envelope returned by every non-2xx response."""

    success: bool = False
    error: ErrorBody
