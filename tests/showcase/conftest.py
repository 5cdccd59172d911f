"""Pytest fixtures for showcase backend tests."""

import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from showcase.core.exceptions import MediaHostError
from showcase.core.media_host import DestroyResult, MediaHost, MediaResource, UploadResult, get_media_host
from showcase.core.thumbnails import encode_reference, make_reference
from showcase.database import Base, get_db
from showcase.main import app
from showcase.models.file import File
from showcase.models.project import Project

FOLDER = "project-thumbnails"
CLOUDINARY_URL = "https://res.cloudinary.com/demo/image/upload/v1700000000"


class FakeMediaHost(MediaHost):
    """In-memory media host recording every call.

    Attributes:
        failing_ids: Public ids whose destroy raises MediaHostError
        destroy_results: Public id -> result returned by destroy (default "ok")
        fail_uploads: Whether upload raises MediaHostError
    """

    def __init__(self) -> None:
        self.uploads: List[Dict[str, Any]] = []
        self.destroyed: List[str] = []
        self.resources: List[MediaResource] = []
        self.failing_ids: set[str] = set()
        self.destroy_results: Dict[str, str] = {}
        self.fail_uploads = False

    def upload(
        self,
        payload: str,
        folder: str,
        public_id: str,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> UploadResult:
        if self.fail_uploads:
            raise MediaHostError("upload rejected")
        self.uploads.append(
            {"payload": payload, "folder": folder, "public_id": public_id, "transformation": transformation}
        )
        return UploadResult(
            public_id=f"{folder}/{public_id}",
            secure_url=f"{CLOUDINARY_URL}/{folder}/{public_id}.png",
        )

    def destroy(self, public_id: str) -> DestroyResult:
        self.destroyed.append(public_id)
        if public_id in self.failing_ids:
            raise MediaHostError(f"destroy failed for {public_id}")
        return DestroyResult(result=self.destroy_results.get(public_id, "ok"))

    def list_resources(self, folder: str, max_results: int = 100) -> List[MediaResource]:
        return [resource for resource in self.resources if resource.public_id.startswith(f"{folder}/")][:max_results]


@pytest.fixture(scope="function")
def test_db_engine():
    """Create a database engine for testing.

    Uses TEST_DATABASE_URL when set, otherwise an in-memory SQLite database.
    """
    test_db_url = os.getenv("TEST_DATABASE_URL")

    if test_db_url:
        engine = create_engine(test_db_url, pool_pre_ping=True)
    else:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Cleanup: drop all tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine,
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def media_host() -> FakeMediaHost:
    """Fake media host injected in place of Cloudinary."""
    return FakeMediaHost()


@pytest.fixture(scope="function")
def test_client(test_db_session: Session, media_host: FakeMediaHost) -> Generator[TestClient, None, None]:
    """Create a test client with database and media host dependency overrides."""

    def override_get_db() -> Generator[Session, None, None]:
        """Override get_db dependency to use test database session."""
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_host] = lambda: media_host

    client = TestClient(app)

    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def create_file(test_db_session: Session) -> Callable:
    """Factory function to insert file registry rows directly in the database.

    Example:
        ```python
        def test_example(create_file):
            file = create_file(token="abc123", filename="cover.png")
            assert file.id == "project-thumbnails/abc123"
        ```
    """

    def _create_file(
        token: str,
        filename: str,
        created_at: Optional[datetime] = None,
    ) -> File:
        file = File(
            id=f"{FOLDER}/{token}",
            filename=filename,
            url=f"{CLOUDINARY_URL}/{FOLDER}/{token}.png",
            created_at=created_at or datetime.now(timezone.utc),
        )
        test_db_session.add(file)
        test_db_session.commit()
        test_db_session.refresh(file)
        return file

    return _create_file


@pytest.fixture(scope="function")
def create_project(test_db_session: Session) -> Callable:
    """Factory function to insert projects directly in the database.

    ``thumbnail`` may be a File row (an uploaded thumbnail), a reference dict,
    or a raw string stored as-is.
    """

    def _create_project(
        project_id: str,
        name: str = "Portfolio Site",
        desc: str = "A personal portfolio built with a static site generator.",
        short_desc: Optional[str] = None,
        thumbnail: Any = None,
        created_at: Optional[datetime] = None,
    ) -> Project:
        if isinstance(thumbnail, File):
            stored = encode_reference(make_reference(thumbnail.url, thumbnail.filename, thumbnail.id))
        elif isinstance(thumbnail, dict):
            stored = encode_reference(thumbnail)
        elif isinstance(thumbnail, str):
            stored = thumbnail
        else:
            stored = encode_reference(make_reference("https://example.com/cover.png"))

        timestamp = created_at or datetime(2024, 1, 1, tzinfo=timezone.utc)
        project = Project(
            id=project_id,
            name=name,
            short_desc=short_desc or desc,
            description=desc,
            thumbnail=stored,
            created_at=timestamp,
            updated_at=timestamp,
        )
        test_db_session.add(project)
        test_db_session.commit()
        test_db_session.refresh(project)
        return project

    return _create_project
