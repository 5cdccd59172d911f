"""Pydantic schemas package."""

from showcase.schemas.common import Envelope, ListEnvelope, PaginatedEnvelope, PaginationInfo

__all__ = [
    "Envelope",
    "ListEnvelope",
    "PaginatedEnvelope",
    "PaginationInfo",
]
