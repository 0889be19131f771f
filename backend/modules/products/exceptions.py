"""
Products module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ValidationError, ExternalServiceError


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found with id of {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class InvalidImageError(ValidationError):
    """Raised when an uploaded file is not an acceptable image."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_IMAGE",
            details={"filename": filename} if filename else None,
        )

    @classmethod
    def too_large(cls, max_bytes: int, filename: Optional[str] = None) -> "InvalidImageError":
        limit_mb = max_bytes // (1024 * 1024)
        return cls(f"Image exceeds the {limit_mb} MB limit", filename)


class ImageUploadError(ExternalServiceError):
    """Raised when the hosted image store rejects or fails an upload."""

    def __init__(self, filename: str):
        super().__init__(
            "Image upload failed",
            service="storage",
            code="IMAGE_UPLOAD_FAILED",
            details={"filename": filename},
        )
