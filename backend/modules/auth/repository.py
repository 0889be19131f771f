"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
Email and phone number uniqueness is enforced by the table's UNIQUE
constraints (see migrations/001_create_users.sql).
"""

from typing import Optional, Any

import pydantic
from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository, RecordValidationError

from .models import User, NewUserRecord
from .passwords import PasswordHasher

USERS_TABLE = "users"
PUBLIC_COLUMNS = "id, name, email, phone_number, created_at"
PRIVATE_COLUMNS = f"{PUBLIC_COLUMNS}, password_hash"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    The password hash is never selected unless a caller asks for it.
    """

    def __init__(self, db: Client, hasher: PasswordHasher) -> None:
        super().__init__(db)
        self._hasher = hasher

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        return self._find_one("id", user_id, PUBLIC_COLUMNS)

    def get_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        """
        Get a user by email.

        Args:
            email: The email address to look up.
            include_password: Whether to load the password hash as well.

        Returns:
            User if found, None otherwise.
        """
        columns = PRIVATE_COLUMNS if include_password else PUBLIC_COLUMNS
        return self._find_one("email", email, columns)

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        """Get a user by phone number."""
        return self._find_one("phone_number", phone_number, PUBLIC_COLUMNS)

    def create(self, name: str, email: str, phone_number: str, password: str) -> User:
        """
        Create a new user record.

        The password is hashed here; the plaintext never leaves this method.

        Raises:
            RecordValidationError: If the record violates the storage schema.
            RecordConflictError: If email or phone number is already taken.
        """
        try:
            record = NewUserRecord(name=name, email=email, phone_number=phone_number)
        except pydantic.ValidationError as e:
            raise RecordValidationError([error["msg"] for error in e.errors()]) from e

        data = record.model_dump()
        data["password_hash"] = self._hasher.hash(password)

        try:
            result = self._db.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            self._reraise(e)

        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: str, columns: str) -> Optional[User]:
        result = (
            self._db.table(USERS_TABLE)
            .select(columns)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            phone_number=data["phone_number"],
            password_hash=data.get("password_hash"),
            created_at=data.get("created_at"),
        )
