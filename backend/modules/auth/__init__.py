"""
Authentication module.

Handles registration, login, bearer tokens and the current-user lookup.

Public API:
- IAuthService: Interface for auth operations
- IUserRepository: Persistence contract for user accounts
- AuthService: Default implementation
- TokenIssuer: Token minting and verification
- CredentialValidator: Registration/login input checks
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import User, TokenClaims, RegisterRequest, LoginRequest
from .service import AuthService
from .tokens import TokenIssuer
from .validation import CredentialValidator
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Implementations
    "AuthService",
    "TokenIssuer",
    "CredentialValidator",
    # Models
    "User",
    "TokenClaims",
    "RegisterRequest",
    "LoginRequest",
    # Exceptions
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
]
