"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 50


class RegisterRequest(BaseModel):
    """
    Registration payload.

    Every field is optional at the schema level so that missing fields are
    reported by the credential validator with the API's own message
    instead of a generic schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Login payload."""

    email: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    """
    A stored user account.

    ``password_hash`` is only loaded when explicitly requested and is
    excluded from every serialization.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="User ID (UUID)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    phone_number: str = Field(..., alias="phoneNumber", description="Phone number")
    password_hash: Optional[str] = Field(None, exclude=True, repr=False)
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Account creation time")

    def without_password(self) -> "User":
        """Return a copy with the password hash dropped."""
        return self.model_copy(update={"password_hash": None})

    def to_public(self) -> dict[str, Any]:
        """Serialize for API responses (camelCase, no password hash)."""
        return self.model_dump(mode="json", by_alias=True)


class NewUserRecord(BaseModel):
    """
    Storage schema for a user row about to be inserted.

    Mirrors the column constraints of the ``users`` table so that schema
    violations are reported before the round-trip.
    """

    name: str
    email: str
    phone_number: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("storefront_name_required", "Please add a name")
        if len(value) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "storefront_name_length",
                "Name cannot be more than {max_length} characters",
                {"max_length": NAME_MAX_LENGTH},
            )
        return value


class TokenClaims(BaseModel):
    """
    Claims carried by a bearer token.

    Tokens are stateless: nothing about them is stored server-side.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    email: str
    name: str
    phone_number: str = Field(..., alias="phoneNumber")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class TokenResponse(BaseModel):
    """Successful registration/login response."""

    success: bool = True
    token: str


class UserResponse(BaseModel):
    """Current user response."""

    success: bool = True
    data: dict[str, Any]


class EmptyDataResponse(BaseModel):
    """Response carrying an empty data object (logout)."""

    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
