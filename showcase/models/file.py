"""File model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from showcase.database import Base


class File(Base):
    """Metadata for a thumbnail image stored on the media host."""

    __tablename__ = "files"

    # Folder-qualified media host public id, e.g. "project-thumbnails/<token>"
    id = Column(String(255), primary_key=True)
    filename = Column(String(255), nullable=False, index=True)
    url = Column(Text, nullable=False)
    created_at = Column(
        "createdAt",
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation of File."""
        return f"<File(id={self.id}, filename={self.filename})>"
