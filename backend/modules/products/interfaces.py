"""
Products module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Product, ProductForm, ImageUpload


@runtime_checkable
class IImageStore(Protocol):
    """A hosted object store for product images."""

    def upload(self, image: ImageUpload) -> str:
        """
        Store an image and return its public URL.

        Raises:
            ImageUploadError: If the store fails
        """
        ...


@runtime_checkable
class IProductService(Protocol):
    """
    Interface for catalog operations.

    All lookups by ID raise ProductNotFoundError for unknown products.
    """

    async def list_products(self) -> list[Product]:
        ...

    async def get_product(self, product_id: str) -> Product:
        ...

    async def create_product(self, form: ProductForm, uploads: list[ImageUpload]) -> Product:
        """
        Create a product, uploading its images first.

        Raises:
            ValidationError: If the form or an image is invalid
            ImageUploadError: If the image store fails
        """
        ...

    async def update_product(
        self, product_id: str, form: ProductForm, uploads: list[ImageUpload]
    ) -> Product:
        """
        Partially update a product.

        ``form.images`` (JSON list) filters the existing images; uploads are
        appended.
        """
        ...

    async def delete_product(self, product_id: str) -> None:
        ...
