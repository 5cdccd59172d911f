"""Database connection and session management."""

from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from showcase.config import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """Connection pool options for the given database URL.

    SQLite uses its own pool classes, so sizing only applies to server databases.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 10,  # Number of connections to maintain
        "max_overflow": 20,  # Maximum number of connections beyond pool_size
    }


# Create database engine
engine = create_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL query logging in development
    **_engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session.

    Yields:
        Session: SQLAlchemy database session

    Example:
        ```python
        from showcase.database import get_db

        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
        ```
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
