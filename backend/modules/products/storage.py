"""
Product image storage on Supabase Storage.

Images are written under a unique name in a public bucket; the public URL
is what gets stored on the product.
"""

import logging
from pathlib import PurePosixPath
from uuid import uuid4

from supabase import Client

from .exceptions import ImageUploadError
from .interfaces import IImageStore
from .models import ImageUpload

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "cakeshop"


class SupabaseImageStore(IImageStore):
    """Uploads product images to a Supabase Storage bucket."""

    def __init__(self, db: Client, bucket: str):
        self._db = db
        self._bucket = bucket

    def object_path(self, image: ImageUpload) -> str:
        """Unique object path that keeps the original file extension."""
        suffix = PurePosixPath(image.filename or "").suffix.lower()
        return f"{IMAGE_FOLDER}/{uuid4().hex}{suffix}"

    def upload(self, image: ImageUpload) -> str:
        path = self.object_path(image)
        bucket = self._db.storage.from_(self._bucket)
        try:
            bucket.upload(path, image.data, {"content-type": image.content_type})
            url = bucket.get_public_url(path)
        except Exception as e:
            # Any upstream failure (HTTP, auth, quota) surfaces as one error
            logger.exception("Upload of %s to bucket %s failed", image.filename, self._bucket)
            raise ImageUploadError(image.filename) from e

        logger.info("Uploaded %s as %s", image.filename, path)
        return url
