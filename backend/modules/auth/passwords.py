"""Password hashing using bcrypt.

The repository hashes on create; the auth service verifies on login. Both
get the same configured PasswordHasher from the service container.
"""

from typing import Optional

import bcrypt

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Service for password hashing with a configurable work factor.

    Examples
    --------
    >>> hasher = PasswordHasher(rounds=4)
    >>> hashed = hasher.hash("my_secure_password")
    >>> hasher.verify("my_secure_password", hashed)
    True
    """

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Verify a password against a hash; a missing or malformed hash never matches."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False
