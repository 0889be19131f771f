"""
Credential validation for registration and login.

Checks run in a fixed order and stop at the first failure. The uniqueness
pre-checks are advisory only: two concurrent registrations can both pass
them, and the storage constraint decides (see AuthService.register).
"""

import re

from shared.exceptions import ValidationError

from .interfaces import IUserRepository
from .models import RegisterRequest, LoginRequest

MIN_PASSWORD_LENGTH = 8

# word+ ([.-] word+)* @ word+ ([.-] word+)* (.xx | .xxx)+
EMAIL_PATTERN = re.compile(
    r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+",
    re.ASCII,
)
PHONE_NUMBER_PATTERN = re.compile(r"[0-9]{10,15}")

MISSING_REGISTRATION_FIELDS = "Please provide all required fields"
EMAIL_TAKEN = "Email is already registered"
PHONE_NUMBER_TAKEN = "Phone number is already registered"
INVALID_EMAIL = "Please provide a valid email address"
INVALID_PHONE_NUMBER = "Please provide a valid phone number"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
MISSING_LOGIN_FIELDS = "Please provide an email and password"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone_number(phone_number: str) -> bool:
    return PHONE_NUMBER_PATTERN.fullmatch(phone_number) is not None


class CredentialValidator:
    """Validates registration and login payloads."""

    def __init__(self, users: IUserRepository):
        self._users = users

    def validate_registration(self, request: RegisterRequest) -> None:
        """
        Validate a registration payload.

        Order: presence, email taken, phone taken, email format,
        phone format, password length.

        Raises:
            ValidationError: On the first failing check
        """
        if not (request.name and request.email and request.phone_number and request.password):
            raise ValidationError(MISSING_REGISTRATION_FIELDS)

        if self._users.get_by_email(request.email) is not None:
            raise ValidationError(EMAIL_TAKEN)

        if self._users.get_by_phone_number(request.phone_number) is not None:
            raise ValidationError(PHONE_NUMBER_TAKEN)

        if not is_valid_email(request.email):
            raise ValidationError(INVALID_EMAIL)

        if not is_valid_phone_number(request.phone_number):
            raise ValidationError(INVALID_PHONE_NUMBER)

        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(PASSWORD_TOO_SHORT)

    def validate_login(self, request: LoginRequest) -> None:
        """
        Validate a login payload.

        Raises:
            ValidationError: If email or password is missing
        """
        if not (request.email and request.password):
            raise ValidationError(MISSING_LOGIN_FIELDS)
