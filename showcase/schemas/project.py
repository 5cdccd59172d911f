"""Project schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showcase.core.thumbnails import decode_reference
from showcase.models.project import Project


class ThumbnailReference(BaseModel):
    """Structured thumbnail of a project."""

    url: Optional[str] = None
    filename: Optional[str] = None
    id: Optional[str] = None


class ProjectCreate(BaseModel):
    """Project creation request schema.

    ``thumbnail`` is either an uploaded filename, an external URL, or a
    ``{url, filename, id}`` object; its shape is checked by the registry.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    short_desc: Optional[str] = Field(default=None, alias="shortDesc")
    desc: Optional[str] = None
    thumbnail: Any = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: Optional[str]) -> Optional[str]:
        """Normalize name by stripping whitespace."""
        if v is None:
            return None
        return v.strip() if isinstance(v, str) else v


class ProjectUpdate(ProjectCreate):
    """Project update request schema. Omitted fields are left unchanged."""


class ProjectDelete(BaseModel):
    """Batch project deletion request schema."""

    ids: Optional[list[str]] = None


class ProjectResponse(BaseModel):
    """Project response schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    short_desc: str = Field(..., alias="shortDesc")
    desc: str
    thumbnail: ThumbnailReference
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        """Build a response from a row, decoding the stored thumbnail."""
        return cls(
            id=project.id,
            name=project.name,
            short_desc=project.short_desc,
            desc=project.description,
            thumbnail=ThumbnailReference(**decode_reference(project.thumbnail)),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ThumbnailCleanupResult(BaseModel):
    """Outcome of removing a deleted project's thumbnail from the media host."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    success: bool
    public_id: Optional[str] = Field(default=None, alias="publicId")
    media_host_result: Optional[str] = Field(default=None, alias="mediaHostResult")
    file_deleted: Optional[bool] = Field(default=None, alias="fileDeleted")
    thumbnail_id: Optional[str] = Field(default=None, alias="thumbnailId")
    filename: Optional[str] = None
    thumbnail: Optional[ThumbnailReference] = None
    note: Optional[str] = None
    error: Optional[str] = None


class ProjectDeleteResult(BaseModel):
    """Batch project deletion response data."""

    model_config = ConfigDict(populate_by_name=True)

    deleted_ids: list[str] = Field(..., alias="deletedIds")
    thumbnail_deletion_results: list[ThumbnailCleanupResult] = Field(..., alias="thumbnailDeletionResults")
