"""
Products module.

Catalog CRUD with images stored in Supabase Storage.

Public API:
- IProductService: Interface for catalog operations
- IImageStore: Interface for the hosted image store
- Product, ProductCategory: Models
- ProductNotFoundError, InvalidImageError, ImageUploadError: Exceptions
"""

from .interfaces import IProductService, IImageStore
from .models import Product, ProductCategory, ProductForm, ImageUpload
from .exceptions import ProductNotFoundError, InvalidImageError, ImageUploadError

__all__ = [
    "IProductService",
    "IImageStore",
    "Product",
    "ProductCategory",
    "ProductForm",
    "ImageUpload",
    "ProductNotFoundError",
    "InvalidImageError",
    "ImageUploadError",
]
