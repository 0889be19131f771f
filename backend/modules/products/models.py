"""
Products module data models.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class ProductCategory(str, Enum):
    """Catalog categories."""

    CAKE = "Cake"
    PASTRY = "Pastry"
    COOKIE = "Cookie"
    BREAD = "Bread"
    OTHER = "Other"


class Product(BaseModel):
    """A stored catalog product."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float
    category: ProductCategory
    images: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    is_available: bool = Field(default=True, alias="isAvailable")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    def to_public(self) -> dict[str, Any]:
        """Serialize for API responses (camelCase)."""
        return self.model_dump(mode="json", by_alias=True)


class ProductDraft(BaseModel):
    """
    Schema a product must satisfy before it is written.

    Every field is validated even when absent so that all problems are
    reported at once.
    """

    name: Optional[str] = Field(None, validate_default=True)
    description: Optional[str] = Field(None, validate_default=True)
    price: Optional[float] = Field(None, validate_default=True)
    category: Optional[str] = Field(None, validate_default=True)
    images: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> str:
        value = (value or "").strip()
        if not value:
            raise PydanticCustomError("storefront_required", "Please add a product name")
        if len(value) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "storefront_max_length",
                "Name cannot be more than {max_length} characters",
                {"max_length": NAME_MAX_LENGTH},
            )
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: Optional[str]) -> str:
        if not value:
            raise PydanticCustomError("storefront_required", "Please add a description")
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "storefront_max_length",
                "Description cannot be more than {max_length} characters",
                {"max_length": DESCRIPTION_MAX_LENGTH},
            )
        return value

    @field_validator("price")
    @classmethod
    def validate_price(cls, value: Optional[float]) -> float:
        if value is None:
            raise PydanticCustomError("storefront_required", "Please add a price")
        if not math.isfinite(value):
            raise PydanticCustomError("storefront_number", "Price must be a number")
        if value < 0:
            raise PydanticCustomError("storefront_min", "Price cannot be negative")
        return value

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: Optional[str]) -> str:
        if not value:
            raise PydanticCustomError("storefront_required", "Please add a category")
        allowed = [category.value for category in ProductCategory]
        if value not in allowed:
            raise PydanticCustomError(
                "storefront_enum",
                "Category must be one of: {allowed}",
                {"allowed": ", ".join(allowed)},
            )
        return value


class ProductForm(BaseModel):
    """
    Raw multipart form fields of a create/update request.

    List fields arrive JSON-encoded; ``images`` on update lists the
    existing image URLs to keep.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None
    ingredients: Optional[str] = None
    allergens: Optional[str] = None
    images: Optional[str] = None
    is_available: Optional[str] = None


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file held in memory."""

    filename: str
    content_type: str
    data: bytes


class ProductResponse(BaseModel):
    """Single product response."""

    success: bool = True
    data: dict[str, Any]


class ProductListResponse(BaseModel):
    """Product list response."""

    success: bool = True
    count: int
    data: list[dict[str, Any]]
