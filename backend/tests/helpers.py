"""
Shared test utilities.

Token forging, settings construction and an in-memory user repository
that behaves like the ``users`` table (including its UNIQUE constraints).
"""

from datetime import datetime, timezone, timedelta
from typing import Optional
from uuid import uuid4

import jwt  # PyJWT
import pydantic

from modules.auth.models import User, NewUserRecord
from modules.auth.passwords import PasswordHasher
from shared.config import Settings
from shared.repository import RecordConflictError, RecordValidationError

# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"


def make_settings(**overrides) -> Settings:
    """Build settings that ignore the developer's .env file."""
    values = {
        "jwt_secret": TEST_JWT_SECRET,
        "environment": "production",
        "bcrypt_rounds": 4,
        "supabase_url": "",
        "supabase_service_role_key": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    name: str = "Test User",
    phone_number: str = "1234567890",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test token with the claims the API issues.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        name: Name to include in the token
        phone_number: Phone number to include in the token
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)
    payload = {
        "id": user_id,
        "email": email,
        "name": name,
        "phoneNumber": phone_number,
        "iat": int((now - timedelta(days=8) if expired else now).timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class InMemoryUserRepository:
    """IUserRepository backed by a dict, enforcing email/phone uniqueness."""

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self._hasher = hasher or PasswordHasher(rounds=4)
        self._users: dict[str, User] = {}
        self.create_calls = 0

    def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.without_password() if user else None

    def get_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user if include_password else user.without_password()
        return None

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        for user in self._users.values():
            if user.phone_number == phone_number:
                return user.without_password()
        return None

    def create(self, name: str, email: str, phone_number: str, password: str) -> User:
        self.create_calls += 1
        try:
            record = NewUserRecord(name=name, email=email, phone_number=phone_number)
        except pydantic.ValidationError as e:
            raise RecordValidationError([error["msg"] for error in e.errors()]) from e
        for user in self._users.values():
            if user.email == email:
                raise RecordConflictError("email", email)
            if user.phone_number == phone_number:
                raise RecordConflictError("phone_number", phone_number)
        user = User(
            id=str(uuid4()),
            name=record.name,
            email=email,
            phone_number=phone_number,
            password_hash=self._hasher.hash(password),
            created_at=datetime.now(timezone.utc),
        )
        self._users[user.id] = user
        return user

    def delete(self, user_id: str) -> None:
        self._users.pop(user_id, None)
