"""
Authentication service implementation.

Orchestrates registration and login on top of the credential validator
and the user repository.
"""

import asyncio
import logging

from shared.exceptions import DuplicateFieldError, ValidationError
from shared.models import AuthenticatedUser
from shared.repository import RecordConflictError, RecordValidationError

from .interfaces import IAuthService, IUserRepository
from .models import User, RegisterRequest, LoginRequest
from .exceptions import InvalidCredentialsError, UserNotFoundError
from .passwords import PasswordHasher
from .validation import CredentialValidator

logger = logging.getLogger(__name__)

# Storage column -> API field name
API_FIELD_NAMES = {
    "email": "email",
    "phone_number": "phoneNumber",
    "name": "name",
}


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uniqueness is ultimately the storage layer's job: the validator's
    pre-checks can race, so a constraint violation on insert is translated
    into the same field-named 400 whichever request loses.

    bcrypt hashing (inside the repository create) and verification run in
    a worker thread so they never block the event loop.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher | None = None,
        validator: CredentialValidator | None = None,
    ):
        self._users = users
        self._hasher = hasher or PasswordHasher()
        self._validator = validator or CredentialValidator(users)

    async def register(self, request: RegisterRequest) -> User:
        """Validate the payload and create the user."""
        self._validator.validate_registration(request)

        try:
            user = await asyncio.to_thread(
                self._users.create,
                name=request.name,
                email=request.email,
                phone_number=request.phone_number,
                password=request.password,
            )
        except RecordConflictError as e:
            field = API_FIELD_NAMES.get(e.column, e.column)
            logger.warning("Registration lost uniqueness race on %s", field)
            raise DuplicateFieldError(field) from e
        except RecordValidationError as e:
            raise ValidationError(", ".join(e.messages)) from e

        logger.info("Registered user %s", user.id)
        return user

    async def login(self, request: LoginRequest) -> User:
        """Check credentials; unknown email and wrong password fail identically."""
        self._validator.validate_login(request)

        user = self._users.get_by_email(request.email, include_password=True)
        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, request.password, user.password_hash)
        if not matches:
            logger.info("Login failed: password mismatch for user %s", user.id)
            raise InvalidCredentialsError()

        return user

    async def get_current_user(self, identity: AuthenticatedUser) -> User:
        """Load the stored record for the identity attached by the auth gate."""
        user = self._users.get_by_id(identity.id)
        if user is None:
            raise UserNotFoundError(identity.id)
        return user
