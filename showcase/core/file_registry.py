"""File registry: metadata for thumbnail images stored on the media host."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from showcase.config import get_settings
from showcase.core.exceptions import InvalidRequestError
from showcase.core.media_host import MediaHost
from showcase.core.pagination import Page, PageRequest
from showcase.core.thumbnails import strip_folder
from showcase.models.file import File

logger = logging.getLogger(__name__)

THUMBNAIL_TRANSFORMATION = [
    {"width": 800, "height": 600, "crop": "limit"},
    {"quality": "auto"},
]
MAX_LISTED_THUMBNAILS = 100


class FileRegistry:
    """Tracks uploaded thumbnails and delegates their bytes to the media host.

    Args:
        db: Database session
        media_host: Media host client
        folder: Media host folder holding thumbnails (defaults to settings)
    """

    def __init__(self, db: Session, media_host: MediaHost, folder: Optional[str] = None) -> None:
        self.db = db
        self.media_host = media_host
        self.folder = folder or get_settings().thumbnail_folder

    def list_files(self, page_request: PageRequest) -> Page[File]:
        """List file rows, newest first."""
        files = (
            self.db.query(File)
            .order_by(File.created_at.desc())
            .limit(page_request.limit)
            .offset(page_request.offset)
            .all()
        )
        total = self.db.query(func.count(File.id)).scalar() or 0

        return Page(request=page_request, total=total, items=files)

    def list_thumbnails(self) -> List[Dict[str, Any]]:
        """List the most recent thumbnails straight from the media host."""
        resources = self.media_host.list_resources(folder=self.folder, max_results=MAX_LISTED_THUMBNAILS)

        return [
            {
                "public_id": resource.public_id,
                "filename": f"{strip_folder(resource.public_id, self.folder)}.{resource.format}",
                "url": resource.secure_url,
                "format": resource.format,
                "created_at": resource.created_at,
                "bytes": resource.bytes,
                "width": resource.width,
                "height": resource.height,
            }
            for resource in resources
        ]

    def upload_thumbnail(self, file: Optional[str], filename: Optional[str]) -> Dict[str, Any]:
        """Upload an encoded image and record it.

        Args:
            file: Encoded image payload (data URI, base64 or remote URL)
            filename: Display filename

        Returns:
            dict: Media host public id, filename and delivery URL

        Raises:
            InvalidRequestError: If the payload or filename is missing
            MediaHostError: If the upload fails
        """
        if not file or not filename:
            raise InvalidRequestError("File and filename are required")

        token = secrets.token_urlsafe(16)
        result = self.media_host.upload(
            file,
            folder=self.folder,
            public_id=token,
            transformation=THUMBNAIL_TRANSFORMATION,
        )

        # The remote asset is not rolled back if this insert fails
        record = File(
            id=f"{self.folder}/{token}",
            filename=filename,
            url=result.secure_url,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(record)
        self.db.commit()

        logger.info(f"Uploaded thumbnail {result.public_id} ({filename})")

        return {"id": result.public_id, "filename": filename, "url": result.secure_url}

    def delete_thumbnails(self, ids: Optional[List[str]]) -> Dict[str, Any]:
        """Destroy thumbnails on the media host and remove their rows.

        Each id is destroyed independently; a failure is reported per item and
        never aborts the others. Rows are only removed for successful ids.

        Raises:
            InvalidRequestError: If ``ids`` is missing or empty
        """
        if not ids or not isinstance(ids, list):
            raise InvalidRequestError("IDs array is required and cannot be empty")

        successful: List[str] = []
        failed: List[str] = []

        for public_id in ids:
            try:
                result = self.media_host.destroy(public_id)
            except Exception as e:
                logger.error(f"Error deleting thumbnail {public_id} from media host: {e}")
                failed.append(public_id)
                continue

            if result.ok:
                successful.append(public_id)
            else:
                logger.warning(f"Media host did not delete thumbnail {public_id}: {result.result}")
                failed.append(public_id)

        if successful:
            filenames = [strip_folder(public_id, self.folder) for public_id in successful]
            self.db.query(File).filter(
                or_(File.id.in_(successful), File.filename.in_(filenames))
            ).delete(synchronize_session=False)
            self.db.commit()

        logger.info(f"Deleted {len(successful)} of {len(ids)} thumbnails")

        return {
            "successful": successful,
            "failed": failed,
            "totalRequested": len(ids),
            "totalDeleted": len(successful),
        }
