"""Project model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from showcase.database import Base


class Project(Base):
    """Project model for showcased work, with a serialized thumbnail reference."""

    __tablename__ = "projects"

    id = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    short_desc = Column("shortDesc", Text, nullable=False)
    description = Column("desc", Text, nullable=False)
    # JSON text of {"url", "filename", "id"}; decoded with showcase.core.thumbnails
    thumbnail = Column(Text, nullable=False)
    created_at = Column(
        "createdAt",
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        "updatedAt",
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Project."""
        return f"<Project(id={self.id}, name={self.name})>"
