"""Media host abstraction for thumbnail image storage."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader

from showcase.config import get_settings
from showcase.core.exceptions import MediaHostError

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass
class UploadResult:
    """Result of storing an image on the media host."""

    public_id: str
    secure_url: str


@dataclass
class DestroyResult:
    """Result of a destroy request ("ok", "not found", ...)."""

    result: str

    @property
    def ok(self) -> bool:
        return self.result == "ok"


@dataclass
class MediaResource:
    """An asset listed by the media host."""

    public_id: str
    format: str
    secure_url: str
    created_at: str
    bytes: int
    width: int
    height: int


class MediaHost(ABC):
    """Abstract interface for the image upload, transformation and delivery service."""

    @abstractmethod
    def upload(
        self,
        payload: str,
        folder: str,
        public_id: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> UploadResult:
        """Store an image.

        Args:
            payload: Encoded image (data URI, base64 or remote URL)
            folder: Folder to store the image under
            public_id: Public name of the image inside the folder
            transformation: Incoming transformations applied before storage

        Returns:
            UploadResult: Folder-qualified public id and delivery URL

        Raises:
            MediaHostError: If the upload fails
        """
        raise NotImplementedError

    @abstractmethod
    def destroy(self, public_id: str) -> DestroyResult:
        """Delete an image by its folder-qualified public id.

        Raises:
            MediaHostError: If the request fails
        """
        raise NotImplementedError

    @abstractmethod
    def list_resources(self, folder: str, max_results: int = 100) -> List[MediaResource]:
        """List the most recent images stored under a folder.

        Raises:
            MediaHostError: If the request fails
        """
        raise NotImplementedError


class CloudinaryMediaHost(MediaHost):
    """Cloudinary implementation on top of the official SDK.

    Args:
        cloud_name: Cloudinary cloud name
        api_key: API key
        api_secret: API secret used to sign requests
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        timeout: float = 30.0,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _call(self, operation: str, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        if not self.configured:
            raise MediaHostError("Cloudinary credentials are not configured")

        try:
            return func(*args, timeout=self.timeout, **kwargs)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary {operation} failed: {e}")
            raise MediaHostError(f"Media host {operation} failed: {e}") from e

    def upload(
        self,
        payload: str,
        folder: str,
        public_id: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> UploadResult:
        result = self._call(
            "upload",
            cloudinary.uploader.upload,
            payload,
            folder=folder,
            public_id=public_id,
            transformation=transformation,
            resource_type="image",
        )

        return UploadResult(public_id=result["public_id"], secure_url=result["secure_url"])

    def destroy(self, public_id: str) -> DestroyResult:
        result = self._call("destroy", cloudinary.uploader.destroy, public_id)

        return DestroyResult(result=result.get("result", "error"))

    def list_resources(self, folder: str, max_results: int = 100) -> List[MediaResource]:
        result = self._call(
            "resource listing",
            cloudinary.api.resources,
            type="upload",
            resource_type="image",
            prefix=f"{folder}/",
            max_results=max_results,
        )

        return [
            MediaResource(
                public_id=resource["public_id"],
                format=resource.get("format", ""),
                secure_url=resource.get("secure_url", ""),
                created_at=resource.get("created_at", ""),
                bytes=resource.get("bytes", 0),
                width=resource.get("width", 0),
                height=resource.get("height", 0),
            )
            for resource in result.get("resources", [])
        ]


# Global media host instance
_media_host: MediaHost | None = None


def get_media_host() -> MediaHost:
    """Get media host instance.

    Returns:
        MediaHost: Media host instance (singleton)
    """
    global _media_host
    if _media_host is None:
        settings = get_settings()
        _media_host = CloudinaryMediaHost(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            timeout=settings.media_host_timeout,
        )
    return _media_host
