"""
Shared infrastructure for Storefront backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- error_response: Exception to error-envelope translation
- repository: Base repository and storage signals

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client
from .exceptions import (
    StorefrontError,
    ValidationError,
    DuplicateFieldError,
    AuthenticationError,
    NotFoundError,
    ExternalServiceError,
)
from .error_response import build_error_response
from .models import AuthenticatedUser
from .repository import BaseRepository, RecordConflictError, RecordValidationError

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "StorefrontError",
    "ValidationError",
    "DuplicateFieldError",
    "AuthenticationError",
    "NotFoundError",
    "ExternalServiceError",
    "build_error_response",
    "AuthenticatedUser",
    "BaseRepository",
    "RecordConflictError",
    "RecordValidationError",
]
