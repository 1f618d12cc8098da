"""Object storage providers for product photos.

Provides an abstract interface and a Cloudinary implementation. Photos are
stored as ``{"url", "public_id"}`` pairs on the product record; the
public id is what deletion needs.
"""

from __future__ import annotations

import asyncio
import base64
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader

from app.core.config import Settings, get_settings
from app.core.exceptions import ConfigurationMissingError, UpstreamFailureError
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    """An uploaded photo file waiting to be stored.

    Attributes:
        filename: Client-side file name.
        content_type: MIME type reported by the client.
        data: Raw file bytes.
    """

    filename: str
    content_type: str
    data: bytes

    def as_data_uri(self) -> str:
        """Encode the file as a base64 data URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type or 'application/octet-stream'};base64,{encoded}"


@dataclass(frozen=True)
class Photo:
    """A hosted photo reference.

    Attributes:
        url: Public HTTPS URL.
        public_id: Storage identifier used for deletion.
    """

    url: str
    public_id: str

    def to_record(self) -> dict[str, str]:
        """Representation stored in ``Product.photos``."""
        return {"url": self.url, "public_id": self.public_id}


class ObjectStorage(ABC):
    """Abstract base class for photo storage.

    CRITICAL: Implementations must raise ConfigurationMissingError when
    credentials are absent and UpstreamFailureError when the provider fails.
    """

    @abstractmethod
    def is_configured(self) -> bool:
        """Check whether credentials are available."""

    @abstractmethod
    async def upload(self, files: Sequence[PhotoUpload]) -> list[Photo]:
        """Store files and return their hosted references, in input order.

        Raises:
            ConfigurationMissingError: If credentials are missing.
            UpstreamFailureError: If any upload fails.
        """

    @abstractmethod
    async def delete(self, public_ids: Sequence[str]) -> None:
        """Delete stored photos by public id.

        Raises:
            ConfigurationMissingError: If credentials are missing.
            UpstreamFailureError: If any deletion fails.
        """


class CloudinaryStorage(ObjectStorage):
    """Cloudinary-backed photo storage.

    The SDK is blocking; each call runs in a worker thread and the calls
    for one request are issued concurrently.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize storage.

        Args:
            settings: Application settings (defaults to the cached settings).
        """
        self.settings = settings or get_settings()

    def is_configured(self) -> bool:
        return self.settings.cloudinary_configured

    def _credentials(self) -> dict[str, Any]:
        if not self.is_configured():
            raise ConfigurationMissingError("Cloudinary Configuration Missing")
        return {
            "cloud_name": self.settings.cloud_name,
            "api_key": self.settings.cloud_api_key,
            "api_secret": self.settings.cloud_api_secret,
        }

    def _upload_one(self, file: PhotoUpload, credentials: dict[str, Any]) -> Photo:
        result = cloudinary.uploader.upload(
            file.as_data_uri(),
            folder=self.settings.cloud_folder,
            resource_type="image",
            **credentials,
        )
        url = result.get("secure_url")
        if not url:
            raise UpstreamFailureError(
                "Photo upload returned no URL",
                details={"filename": file.filename},
            )
        return Photo(url=url, public_id=result["public_id"])

    def _delete_one(self, public_id: str, credentials: dict[str, Any]) -> None:
        cloudinary.uploader.destroy(public_id, **credentials)

    async def upload(self, files: Sequence[PhotoUpload]) -> list[Photo]:
        credentials = self._credentials()
        try:
            photos = await asyncio.gather(
                *(asyncio.to_thread(self._upload_one, f, credentials) for f in files)
            )
        except cloudinary.exceptions.Error as e:
            raise UpstreamFailureError(
                f"Photo upload failed: {e}",
                details={"files": len(files)},
            ) from e

        logger.info("storage.photos_uploaded", count=len(photos))
        return list(photos)

    async def delete(self, public_ids: Sequence[str]) -> None:
        if not public_ids:
            return
        credentials = self._credentials()
        try:
            await asyncio.gather(
                *(asyncio.to_thread(self._delete_one, pid, credentials) for pid in public_ids)
            )
        except cloudinary.exceptions.Error as e:
            raise UpstreamFailureError(
                f"Photo deletion failed: {e}",
                details={"public_ids": list(public_ids)},
            ) from e

        logger.info("storage.photos_deleted", count=len(public_ids))


def get_object_storage() -> ObjectStorage:
    """FastAPI dependency returning the configured photo storage."""
    return CloudinaryStorage()
