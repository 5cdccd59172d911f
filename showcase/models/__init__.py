"""Database models package."""

from showcase.models.file import File
from showcase.models.project import Project

__all__ = ["Project", "File"]
