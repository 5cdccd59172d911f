"""FastAPI dependency providers for the resource registries."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from showcase.core.file_registry import FileRegistry
from showcase.core.media_host import MediaHost, get_media_host
from showcase.core.project_registry import ProjectRegistry
from showcase.database import get_db


def get_file_registry(
    db: Annotated[Session, Depends(get_db)],
    media_host: Annotated[MediaHost, Depends(get_media_host)],
) -> FileRegistry:
    """Build a file registry bound to the request's database session."""
    return FileRegistry(db, media_host)


def get_project_registry(
    db: Annotated[Session, Depends(get_db)],
    media_host: Annotated[MediaHost, Depends(get_media_host)],
) -> ProjectRegistry:
    """Build a project registry bound to the request's database session."""
    return ProjectRegistry(db, media_host)
