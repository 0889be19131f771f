"""
Product repository for database access.

Encapsulates all Supabase queries and data mapping for the ``products`` table.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, INVALID_TEXT_REPRESENTATION

from .models import Product

PRODUCTS_TABLE = "products"


class ProductRepository(BaseRepository[Product]):
    """
    Repository for product data access.

    All methods return Pydantic models with proper mapping from database rows.
    """

    def list_all(self) -> list[Product]:
        """List all products, most recent first."""
        result = (
            self._db.table(PRODUCTS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_product(row) for row in result.data]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """
        Get a product by ID.

        A malformed ID is treated as unknown.
        """
        try:
            result = self._db.table(PRODUCTS_TABLE).select("*").eq("id", product_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        if not result.data:
            return None
        return self._map_to_product(result.data[0])

    def create(self, data: dict[str, Any]) -> Product:
        """
        Create a new product record.

        Raises:
            RecordValidationError: If a column constraint rejects the row.
        """
        try:
            result = self._db.table(PRODUCTS_TABLE).insert(data).execute()
        except APIError as e:
            self._reraise(e)
        return self._map_to_product(result.data[0])

    def update(self, product_id: str, data: dict[str, Any]) -> Optional[Product]:
        """
        Update a product and return the new version.

        Returns:
            The updated product, or None if no row matched.
        """
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = self._db.table(PRODUCTS_TABLE).update(data).eq("id", product_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            self._reraise(e)
        if not result.data:
            return None
        return self._map_to_product(result.data[0])

    def delete(self, product_id: str) -> bool:
        """
        Delete a product.

        Returns:
            True if a row was deleted. A malformed ID matches nothing.
        """
        try:
            result = self._db.table(PRODUCTS_TABLE).delete().eq("id", product_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return False
            raise
        return bool(result.data)

    def _map_to_product(self, data: dict[str, Any]) -> Product:
        """Map database row to Product model."""
        return Product(
            id=str(data["id"]),
            name=data["name"],
            description=data["description"],
            price=float(data["price"]),
            category=data["category"],
            images=data.get("images") or [],
            ingredients=data.get("ingredients") or [],
            allergens=data.get("allergens") or [],
            is_available=data["is_available"] if data.get("is_available") is not None else True,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
