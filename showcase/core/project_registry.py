"""Project registry: project rows and their thumbnail references."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from showcase.config import get_settings
from showcase.core.exceptions import InvalidRequestError, NotFoundError
from showcase.core.media_host import MediaHost
from showcase.core.pagination import Page, PageRequest
from showcase.core.thumbnails import (
    decode_reference,
    encode_reference,
    generate_short_desc,
    is_media_host_url,
    is_same_thumbnail,
    is_valid_url,
    make_reference,
    resolve_public_id,
)
from showcase.models.file import File
from showcase.models.project import Project

logger = logging.getLogger(__name__)

INVALID_THUMBNAIL_MESSAGE = "Thumbnail must be a valid filename (uploaded file) or a valid URL"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


class ProjectRegistry:
    """Creates, updates and deletes projects.

    Thumbnails are resolved against the ``files`` table or accepted as external
    URLs. Replaced or orphaned media host assets are cleaned up best effort:
    cleanup failures are logged and never fail the request.

    Args:
        db: Database session
        media_host: Media host client
        folder: Media host folder holding thumbnails (defaults to settings)
    """

    def __init__(self, db: Session, media_host: MediaHost, folder: Optional[str] = None) -> None:
        self.db = db
        self.media_host = media_host
        self.folder = folder or get_settings().thumbnail_folder

    def list_projects(self, page_request: PageRequest) -> Page[Project]:
        """List projects, newest first."""
        projects = (
            self.db.query(Project)
            .order_by(Project.created_at.desc())
            .limit(page_request.limit)
            .offset(page_request.offset)
            .all()
        )
        total = self.db.query(func.count(Project.id)).scalar() or 0

        return Page(request=page_request, total=total, items=projects)

    def get_project(self, project_id: str) -> Project:
        """Get a project by id.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def create_project(
        self,
        name: Optional[str],
        desc: Optional[str],
        thumbnail: Any,
        short_desc: Optional[str] = None,
    ) -> Project:
        """Create a project.

        Args:
            name: Project name
            desc: Full description
            thumbnail: Uploaded filename, external URL or ``{url, filename, id}`` object
            short_desc: Short description, derived from ``desc`` when omitted

        Returns:
            Project: The created project

        Raises:
            InvalidRequestError: If a required field is missing or the thumbnail is invalid
        """
        if not name or not desc or not thumbnail:
            raise InvalidRequestError("Name, description, and thumbnail are required")

        reference = self._resolve_thumbnail(thumbnail)
        now = datetime.now(timezone.utc)

        project = Project(
            id=secrets.token_urlsafe(16),
            name=name,
            short_desc=short_desc or generate_short_desc(desc),
            description=desc,
            thumbnail=encode_reference(reference),
            created_at=now,
            updated_at=now,
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)

        logger.info(f"Created project {project.id}")

        return project

    def update_project(self, project_id: str, fields: Dict[str, Any]) -> Project:
        """Apply a partial update.

        Args:
            project_id: Project id
            fields: Supplied subset of ``name``, ``short_desc``, ``desc`` and ``thumbnail``;
                ``None`` values are treated as not supplied

        Returns:
            Project: The updated project

        Raises:
            NotFoundError: If the project does not exist
            InvalidRequestError: If a supplied field is empty or the thumbnail is invalid
        """
        project = self.get_project(project_id)
        supplied = {key: value for key, value in fields.items() if value is not None}

        changes: Dict[str, Any] = {}

        if "name" in supplied:
            if not supplied["name"]:
                raise InvalidRequestError("Name cannot be empty")
            changes["name"] = supplied["name"]

        if "desc" in supplied:
            if not supplied["desc"]:
                raise InvalidRequestError("Description cannot be empty")
            changes["description"] = supplied["desc"]
            if "short_desc" not in supplied:
                changes["short_desc"] = generate_short_desc(supplied["desc"])

        if "short_desc" in supplied:
            changes["short_desc"] = supplied["short_desc"]

        if "thumbnail" in supplied:
            new_reference = self._resolve_thumbnail(supplied["thumbnail"])
            old_reference = decode_reference(project.thumbnail) if project.thumbnail else None

            if is_same_thumbnail(old_reference, new_reference):
                logger.info(f"Thumbnail of project {project_id} unchanged, keeping media host asset")
            elif old_reference is not None:
                self._discard_replaced_thumbnail(old_reference)

            changes["thumbnail"] = encode_reference(new_reference)

        changes["updated_at"] = datetime.now(timezone.utc)

        statement = (
            update(Project)
            .where(Project.id == project_id)
            .values({getattr(Project, key): value for key, value in changes.items()})
        )
        self.db.execute(statement)
        self.db.commit()
        self.db.refresh(project)

        logger.info(f"Updated project {project_id}: {', '.join(sorted(changes))}")

        return project

    def delete_projects(self, ids: Optional[List[str]]) -> Dict[str, Any]:
        """Delete projects and clean up their media host thumbnails.

        Either every requested project exists and all are deleted, or nothing
        is deleted. Thumbnail cleanup outcomes are reported per project.

        Raises:
            InvalidRequestError: If ``ids`` is missing or empty
            NotFoundError: If any requested project does not exist
        """
        if not ids or not isinstance(ids, list):
            raise InvalidRequestError("ids array is required and must contain at least one project ID")

        projects = self.db.query(Project).filter(Project.id.in_(ids)).all()
        if not projects:
            raise NotFoundError("No projects found with the provided IDs")

        found_ids = [project.id for project in projects]
        missing_ids = [project_id for project_id in ids if project_id not in found_ids]
        if missing_ids:
            raise NotFoundError(f"Projects not found with IDs: {', '.join(missing_ids)}")

        outcomes = [self._cleanup_thumbnail(project) for project in projects]

        self.db.query(Project).filter(Project.id.in_(ids)).delete(synchronize_session=False)
        self.db.commit()

        logger.info(f"Deleted {len(found_ids)} projects")

        return {"deletedIds": found_ids, "thumbnailDeletionResults": outcomes}

    def _find_file(self, filename: str) -> Optional[File]:
        return self.db.query(File).filter(File.filename == filename).first()

    def _resolve_thumbnail(self, thumbnail: Any) -> Dict[str, Any]:
        """Turn request input into a thumbnail reference.

        Raises:
            InvalidRequestError: If the input is neither a known filename, a valid URL,
                nor an object with a valid ``url`` and a ``filename``
        """
        if isinstance(thumbnail, str):
            file = self._find_file(thumbnail)
            if file is not None:
                return make_reference(file.url, file.filename, file.id)
            if is_valid_url(thumbnail):
                return make_reference(thumbnail)

        elif isinstance(thumbnail, dict) and _is_text(thumbnail.get("url")) and _is_text(thumbnail.get("filename")):
            file_id = thumbnail.get("id")
            if is_valid_url(thumbnail["url"]) and (file_id is None or isinstance(file_id, str)):
                if not file_id:
                    file = self._find_file(thumbnail["filename"])
                    file_id = file.id if file is not None else None
                return make_reference(thumbnail["url"], thumbnail["filename"], file_id)

        raise InvalidRequestError(INVALID_THUMBNAIL_MESSAGE)

    def _discard_replaced_thumbnail(self, reference: Dict[str, Any]) -> None:
        """Best effort removal of a superseded media host asset and its file row."""
        if not is_media_host_url(reference.get("url")):
            return

        public_id = resolve_public_id(reference, self.folder)
        if public_id is None:
            logger.error(f"Could not determine public ID for old thumbnail: {reference}")
            return

        try:
            result = self.media_host.destroy(public_id)
            logger.info(f"Old thumbnail {public_id} deleted from media host: {result.result}")

            deleted = self.db.query(File).filter(File.id == public_id).delete(synchronize_session=False)
            self.db.commit()
            if deleted:
                logger.info(f"File record deleted from database: {public_id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting old thumbnail {public_id}: {e}")

    def _cleanup_thumbnail(self, project: Project) -> Dict[str, Any]:
        """Best effort removal of a deleted project's thumbnail, returning the outcome."""
        reference = decode_reference(project.thumbnail)

        if not is_media_host_url(reference.get("url")):
            return {
                "id": project.id,
                "success": True,
                "note": "No media host asset to delete",
                "thumbnail": reference,
            }

        public_id = resolve_public_id(reference, self.folder, strict=True)
        if public_id is None:
            logger.error(f"Could not determine public ID for thumbnail: {reference}")
            return {
                "id": project.id,
                "success": False,
                "error": "Could not determine public ID for thumbnail",
                "thumbnail": reference,
            }

        try:
            result = self.media_host.destroy(public_id)

            deleted = self.db.query(File).filter(File.id == public_id).delete(synchronize_session=False)
            self.db.commit()

            return {
                "id": project.id,
                "success": result.ok,
                "publicId": public_id,
                "mediaHostResult": result.result,
                "fileDeleted": deleted > 0,
                "thumbnailId": reference.get("id"),
                "filename": reference.get("filename"),
            }
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting thumbnail for project {project.id}: {e}")
            return {"id": project.id, "success": False, "error": str(e)}
