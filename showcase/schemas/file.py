"""File schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ThumbnailUpload(BaseModel):
    """Schema for uploading a thumbnail image."""

    file: Optional[str] = Field(None, description="Encoded image (data URI, base64 or remote URL)")
    filename: Optional[str] = Field(None, description="Display name of the image")


class ThumbnailDelete(BaseModel):
    """Schema for deleting thumbnails by media host public id."""

    ids: Optional[list[str]] = Field(None, description="Folder-qualified media host public ids")


class FileRecordResponse(BaseModel):
    """Schema for returning file registry rows."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Folder-qualified media host public id")
    filename: str = Field(..., description="Display name of the image")
    url: str = Field(..., description="Secure delivery URL")
    created_at: datetime = Field(..., alias="createdAt", description="Timestamp when the file was uploaded")


class UploadedThumbnail(BaseModel):
    """Schema for a freshly uploaded thumbnail."""

    id: str = Field(..., description="Media host public id")
    filename: str = Field(..., description="Display name of the image")
    url: str = Field(..., description="Secure delivery URL")


class MediaHostThumbnail(BaseModel):
    """Schema for a thumbnail listed by the media host."""

    public_id: str
    filename: str
    url: str
    format: str
    created_at: str
    bytes: int
    width: int
    height: int


class ThumbnailDeleteResult(BaseModel):
    """Schema for the outcome of a batch thumbnail deletion."""

    model_config = ConfigDict(populate_by_name=True)

    successful: list[str]
    failed: list[str]
    total_requested: int = Field(..., alias="totalRequested")
    total_deleted: int = Field(..., alias="totalDeleted")
