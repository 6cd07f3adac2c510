"""Cloudinary implementation of the AssetStore."""

import logging
from typing import Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from events.domain.errors import AssetUploadError
from events.stores.interfaces import AssetStore

logger = logging.getLogger(__name__)


class CloudinaryAssetStore(AssetStore):
    """Uploads images to Cloudinary and returns their secure URL.

    Credentials come from ``CLOUDINARY_URL`` in the environment unless explicit
    ones are passed in.
    """

    def __init__(self, credentials: dict[str, Any] | None = None) -> None:
        credentials = {k: v for k, v in (credentials or {}).items() if v}
        if credentials:
            cloudinary.config(secure=True, **credentials)

    def upload(self, data: bytes, folder: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                data, folder=folder, resource_type="image"
            )
        except CloudinaryError as exc:
            logger.error("Image upload to folder %r failed: %s", folder, exc)
            raise AssetUploadError(f"Image upload failed: {exc}") from exc

        url = result.get("secure_url")
        if not url:
            logger.error("Image upload to folder %r returned no secure_url", folder)
            raise AssetUploadError("Image upload failed: no secure_url in response")
        return url
