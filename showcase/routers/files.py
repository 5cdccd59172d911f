"""Files router."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from showcase.core.dependencies import get_file_registry
from showcase.core.exceptions import MediaHostError, ShowcaseError
from showcase.core.file_registry import FileRegistry
from showcase.core.pagination import PageRequest
from showcase.schemas.common import Envelope, ListEnvelope, PaginatedEnvelope
from showcase.schemas.file import (
    FileRecordResponse,
    MediaHostThumbnail,
    ThumbnailDelete,
    ThumbnailDeleteResult,
    ThumbnailUpload,
    UploadedThumbnail,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=PaginatedEnvelope[FileRecordResponse])
def list_files(
    registry: Annotated[FileRegistry, Depends(get_file_registry)],
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedEnvelope[FileRecordResponse]:
    """List uploaded files, newest first.

    Args:
        registry: File registry
        page: Page number (defaults to 1)
        limit: Page size (defaults to 10)

    Returns:
        PaginatedEnvelope[FileRecordResponse]: One page of files with totals
    """
    try:
        result = registry.list_files(PageRequest.from_params(page, limit))
    except Exception as e:
        logger.error(f"Error fetching files: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return PaginatedEnvelope[FileRecordResponse].from_page(
        "Files retrieved successfully",
        result,
        [
            FileRecordResponse(id=file.id, filename=file.filename, url=file.url, created_at=file.created_at)
            for file in result.items
        ],
    )


@router.get("/thumbnails", response_model=ListEnvelope[MediaHostThumbnail])
def list_thumbnails(
    registry: Annotated[FileRegistry, Depends(get_file_registry)],
) -> ListEnvelope[MediaHostThumbnail]:
    """List thumbnails stored on the media host."""
    try:
        thumbnails = registry.list_thumbnails()
    except Exception as e:
        logger.error(f"Error fetching thumbnails from media host: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return ListEnvelope[MediaHostThumbnail](
        code=200,
        total=len(thumbnails),
        message="Thumbnails retrieved successfully",
        data=[MediaHostThumbnail(**thumbnail) for thumbnail in thumbnails],
    )


@router.post("/thumbnail", response_model=Envelope[UploadedThumbnail])
def upload_thumbnail(
    upload: ThumbnailUpload,
    registry: Annotated[FileRegistry, Depends(get_file_registry)],
) -> Envelope[UploadedThumbnail]:
    """Upload a thumbnail image to the media host.

    Args:
        upload: Encoded image and its filename
        registry: File registry

    Returns:
        Envelope[UploadedThumbnail]: Public id, filename and delivery URL

    Raises:
        HTTPException: 400 if the file or filename is missing, 500 if the upload fails
    """
    try:
        uploaded = registry.upload_thumbnail(upload.file, upload.filename)
    except MediaHostError as e:
        logger.error(f"Media host rejected thumbnail upload: {e.message}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error uploading thumbnail: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return Envelope[UploadedThumbnail](
        code=200,
        message="Thumbnail uploaded successfully",
        data=UploadedThumbnail(**uploaded),
    )


@router.delete("/thumbnail", response_model=Envelope[ThumbnailDeleteResult])
def delete_thumbnails(
    request: ThumbnailDelete,
    registry: Annotated[FileRegistry, Depends(get_file_registry)],
) -> Envelope[ThumbnailDeleteResult]:
    """Delete thumbnails by media host public id.

    Partial failures are reported per id inside a successful response.
    """
    try:
        result = registry.delete_thumbnails(request.ids)
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error deleting thumbnails: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from e

    return Envelope[ThumbnailDeleteResult](
        code=200,
        message=f"Successfully deleted {result['totalDeleted']} thumbnails",
        data=ThumbnailDeleteResult(**result),
    )
