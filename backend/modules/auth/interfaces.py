"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service in turn depends on IUserRepository so that storage can be
swapped (or faked in tests) without touching validation logic.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import User, RegisterRequest, LoginRequest


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for user accounts.

    Implementations must enforce uniqueness of email and phone number at the
    storage level and report a violation as RecordConflictError. Passwords
    are hashed by the implementation on create.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    def get_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        ...

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        ...

    def create(self, name: str, email: str, phone_number: str, password: str) -> User:
        """
        Create a user, hashing the password.

        Raises:
            RecordConflictError: If email or phone number is already taken
            RecordValidationError: If the record violates the storage schema
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> User:
        """
        Validate a registration payload and create the user.

        Raises:
            ValidationError: If a field is missing, malformed or taken
            DuplicateFieldError: If storage rejects a duplicate email/phone
        """
        ...

    async def login(self, request: LoginRequest) -> User:
        """
        Check credentials and return the matching user.

        Raises:
            ValidationError: If email or password is missing
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        ...

    async def get_current_user(self, identity: AuthenticatedUser) -> User:
        """
        Load the stored record for an authenticated identity.

        Raises:
            UserNotFoundError: If the account no longer exists
        """
        ...
