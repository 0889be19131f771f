"""API-level response models."""

from .errors import ErrorBody, ErrorEnvelope

__all__ = ["ErrorBody", "ErrorEnvelope"]
