"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from token claims by the auth gate and made
    available to route handlers via dependency injection. It is never
    re-fetched from the database unless a handler needs fresh data.
    """

    model_config = ConfigDict(
        frozen=True,  # Make immutable for safety
        extra="ignore",  # Ignore extra claims (iat, exp)
        populate_by_name=True,
    )

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    name: str = Field(default="", description="Display name")
    phone_number: str = Field(default="", alias="phoneNumber", description="Phone number")
