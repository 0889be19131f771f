"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating storage failures into
storage-agnostic signals that services can act on.
"""

import re
from typing import TypeVar, Generic, NoReturn, Optional

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Postgres SQLSTATE codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
INVALID_TEXT_REPRESENTATION = "22P02"  # e.g. a malformed UUID in a filter

_KEY_DETAIL_RE = re.compile(r"Key \((?P<column>[^)]+)\)=\((?P<value>.*)\) already exists")
_CONSTRAINT_RE = re.compile(r'unique constraint "(?P<constraint>[^"]+)"')


class RecordConflictError(Exception):
    """A storage-level uniqueness constraint rejected a write."""

    def __init__(self, column: str, value: Optional[str] = None):
        super().__init__(f"Duplicate value for column: {column}")
        self.column = column
        self.value = value


class RecordValidationError(Exception):
    """The storage schema rejected a record."""

    def __init__(self, messages: list[str]):
        super().__init__(", ".join(messages))
        self.messages = messages


def conflict_column(error: APIError) -> Optional[str]:
    """
    Extract the conflicting column from a unique-violation error.

    Prefers the ``Key (column)=(value)`` detail; falls back to the
    constraint name (``<table>_<column>_key``).
    """
    match = _KEY_DETAIL_RE.search(error.details or "")
    if match:
        return match.group("column")
    match = _CONSTRAINT_RE.search(error.message or "")
    if match:
        constraint = match.group("constraint")
        parts = constraint.split("_", 1)
        if len(parts) == 2 and parts[1].endswith("_key"):
            return parts[1][: -len("_key")]
        return constraint
    return None


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - Translation of constraint violations via _reraise()

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _translate_error(self, error: APIError) -> Optional[Exception]:
        """
        Map a PostgREST error to a repository signal.

        Returns None for errors that have no storage-agnostic meaning.
        """
        if error.code == UNIQUE_VIOLATION:
            match = _KEY_DETAIL_RE.search(error.details or "")
            value = match.group("value") if match else None
            return RecordConflictError(conflict_column(error) or "unknown", value)
        if error.code in (NOT_NULL_VIOLATION, CHECK_VIOLATION):
            return RecordValidationError([error.message or "Invalid record"])
        return None

    def _reraise(self, error: APIError) -> NoReturn:
        """Raise the signal for ``error``, or ``error`` itself if it has none."""
        signal = self._translate_error(error)
        if signal is None:
            raise error
        raise signal from error
