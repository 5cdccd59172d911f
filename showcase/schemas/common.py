"""Response envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from showcase.core.pagination import Page

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{code, message, data}`` response body."""

    code: int
    message: str
    data: Optional[T] = None


class PaginationInfo(BaseModel):
    page: int
    limit: int


class PaginatedEnvelope(BaseModel, Generic[T]):
    """Envelope for paginated lists, with totals at the top level."""

    model_config = ConfigDict(populate_by_name=True)

    code: int
    message: str
    total: int
    total_pages: int = Field(..., alias="totalPages")
    data: list[T]
    pagination: PaginationInfo

    @classmethod
    def from_page(cls, message: str, page: Page, items: list) -> "PaginatedEnvelope":
        """Build the envelope for a page of already serialized items."""
        return cls(
            code=200,
            message=message,
            total=page.total,
            total_pages=page.total_pages,
            data=items,
            pagination=PaginationInfo(page=page.request.page, limit=page.request.limit),
        )


class ListEnvelope(BaseModel, Generic[T]):
    """Envelope for unpaginated lists carrying a top-level count."""

    code: int
    total: int
    message: str
    data: list[T]
