"""Projects router."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from showcase.core.dependencies import get_project_registry
from showcase.core.exceptions import ShowcaseError
from showcase.core.pagination import PageRequest
from showcase.core.project_registry import ProjectRegistry
from showcase.schemas.common import Envelope, PaginatedEnvelope
from showcase.schemas.project import (
    ProjectCreate,
    ProjectDelete,
    ProjectDeleteResult,
    ProjectResponse,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projects"])


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


@router.post("/project", response_model=Envelope[ProjectResponse], status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
) -> Envelope[ProjectResponse]:
    """Create a new project.

    Args:
        project_data: Project creation data (name, shortDesc, desc, thumbnail)
        registry: Project registry

    Returns:
        Envelope[ProjectResponse]: Created project with its decoded thumbnail

    Raises:
        HTTPException: 400 if a required field is missing or the thumbnail is invalid
    """
    try:
        project = registry.create_project(
            name=project_data.name,
            desc=project_data.desc,
            thumbnail=project_data.thumbnail,
            short_desc=project_data.short_desc,
        )
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error creating project: {e}", exc_info=True)
        raise _internal_error() from e

    return Envelope[ProjectResponse](
        code=status.HTTP_201_CREATED,
        message="Project created successfully",
        data=ProjectResponse.from_project(project),
    )


@router.get("/projects", response_model=PaginatedEnvelope[ProjectResponse])
def list_projects(
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> PaginatedEnvelope[ProjectResponse]:
    """List projects, newest first.

    Args:
        registry: Project registry
        page: Page number (defaults to 1)
        limit: Page size (defaults to 10)

    Returns:
        PaginatedEnvelope[ProjectResponse]: One page of projects with totals
    """
    try:
        result = registry.list_projects(PageRequest.from_params(page, limit))
    except Exception as e:
        logger.error(f"Error fetching projects: {e}", exc_info=True)
        raise _internal_error() from e

    return PaginatedEnvelope[ProjectResponse].from_page(
        "Projects retrieved successfully",
        result,
        [ProjectResponse.from_project(project) for project in result.items],
    )


@router.get("/project/{project_id}", response_model=Envelope[ProjectResponse])
def get_project(
    project_id: str,
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
) -> Envelope[ProjectResponse]:
    """Get a specific project by ID.

    Raises:
        HTTPException: 404 if the project does not exist
    """
    try:
        project = registry.get_project(project_id)
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error fetching project {project_id}: {e}", exc_info=True)
        raise _internal_error() from e

    return Envelope[ProjectResponse](
        code=200,
        message="Project retrieved successfully",
        data=ProjectResponse.from_project(project),
    )


@router.put("/project/{project_id}", response_model=Envelope[ProjectResponse])
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
) -> Envelope[ProjectResponse]:
    """Partially update a project.

    Args:
        project_id: Project ID
        project_data: Any subset of name, shortDesc, desc and thumbnail
        registry: Project registry

    Returns:
        Envelope[ProjectResponse]: Updated project

    Raises:
        HTTPException: 404 if the project does not exist, 400 if a field is invalid
    """
    fields = project_data.model_dump(exclude_unset=True)

    try:
        project = registry.update_project(project_id, fields)
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error updating project {project_id}: {e}", exc_info=True)
        raise _internal_error() from e

    return Envelope[ProjectResponse](
        code=200,
        message="Project updated successfully",
        data=ProjectResponse.from_project(project),
    )


@router.delete("/project", response_model=Envelope[ProjectDeleteResult])
def delete_projects(
    request: ProjectDelete,
    registry: Annotated[ProjectRegistry, Depends(get_project_registry)],
) -> Envelope[ProjectDeleteResult]:
    """Delete one or more projects by ID.

    If any ID is unknown nothing is deleted. Thumbnail cleanup outcomes are
    reported per project.

    Raises:
        HTTPException: 400 if no IDs are given, 404 if any project does not exist
    """
    try:
        result = registry.delete_projects(request.ids)
    except ShowcaseError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"Error deleting project(s): {e}", exc_info=True)
        raise _internal_error() from e

    deleted = len(result["deletedIds"])
    message = "Project deleted successfully" if deleted == 1 else f"{deleted} projects deleted successfully"

    return Envelope[ProjectDeleteResult](
        code=200,
        message=message,
        data=ProjectDeleteResult(**result),
    )
