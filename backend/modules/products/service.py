"""
Product catalog service.

Thin layer over the repository and the image store: parses the multipart
form, validates the result against ProductDraft and uploads images.
"""

import json
import logging
from typing import Any, Optional

import pydantic

from shared.exceptions import ValidationError
from shared.repository import RecordValidationError

from .exceptions import ProductNotFoundError, InvalidImageError
from .interfaces import IProductService, IImageStore
from .models import Product, ProductDraft, ProductForm, ImageUpload
from .repository import ProductRepository

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "on"}


def parse_json_list(raw: Optional[str], field: str) -> Optional[list[str]]:
    """
    Decode a JSON-encoded list of strings from a form field.

    Returns None when the field was not sent.
    """
    if raw is None or raw == "":
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"{field} must be a JSON array of strings")
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{field} must be a JSON array of strings")
    return value


class ProductService(IProductService):
    """Product service backed by Supabase."""

    def __init__(
        self,
        repository: ProductRepository,
        images: IImageStore,
        max_image_bytes: int = 5 * 1024 * 1024,
        max_images: int = 5,
    ):
        self._repository = repository
        self._images = images
        self._max_image_bytes = max_image_bytes
        self._max_images = max_images

    async def list_products(self) -> list[Product]:
        return self._repository.list_all()

    async def get_product(self, product_id: str) -> Product:
        product = self._repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, form: ProductForm, uploads: list[ImageUpload]) -> Product:
        fields = self._form_fields(form)
        self._check_uploads(uploads)
        draft = self._validate({**fields, "images": []})

        draft.images = self._upload_all(uploads)
        product = self._write(lambda data: self._repository.create(data), draft)
        logger.info("Created product %s with %d image(s)", product.id, len(product.images))
        return product

    async def update_product(
        self, product_id: str, form: ProductForm, uploads: list[ImageUpload]
    ) -> Product:
        existing = await self.get_product(product_id)
        fields = self._form_fields(form)
        self._check_uploads(uploads)

        images = existing.images
        keep = parse_json_list(form.images, "images")
        if keep is not None:
            images = [url for url in existing.images if url in keep]

        current = existing.model_dump(
            include={"name", "description", "price", "category", "ingredients", "allergens", "is_available"},
            mode="json",
        )
        draft = self._validate({**current, **fields, "images": images})
        draft.images = images + self._upload_all(uploads)

        product = self._write(lambda data: self._repository.update(product_id, data), draft)
        if product is None:
            # Deleted between the lookup and the write
            raise ProductNotFoundError(product_id)
        return product

    async def delete_product(self, product_id: str) -> None:
        if not self._repository.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _form_fields(self, form: ProductForm) -> dict[str, Any]:
        """Fields the client actually sent, decoded."""
        fields: dict[str, Any] = {}
        for name in ("name", "description", "price", "category"):
            value = getattr(form, name)
            if value is not None:
                fields[name] = value
        for name in ("ingredients", "allergens"):
            value = parse_json_list(getattr(form, name), name)
            if value is not None:
                fields[name] = value
        if form.is_available is not None:
            fields["is_available"] = form.is_available.strip().lower() in TRUE_VALUES
        return fields

    def _check_uploads(self, uploads: list[ImageUpload]) -> None:
        if len(uploads) > self._max_images:
            raise InvalidImageError(f"You can upload at most {self._max_images} images")
        for upload in uploads:
            if not upload.content_type.startswith("image/"):
                raise InvalidImageError("Only image files are allowed", upload.filename)
            if len(upload.data) > self._max_image_bytes:
                raise InvalidImageError.too_large(self._max_image_bytes, upload.filename)

    def _validate(self, data: dict[str, Any]) -> ProductDraft:
        try:
            return ProductDraft.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    def _upload_all(self, uploads: list[ImageUpload]) -> list[str]:
        return [self._images.upload(upload) for upload in uploads]

    def _write(self, operation, draft: ProductDraft):
        try:
            return operation(draft.model_dump())
        except RecordValidationError as e:
            raise ValidationError(", ".join(e.messages)) from e
