"""Root conftest — shared test configuration and fixtures."""

import os
import tempfile
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta

import pytest

# Point the application engine at a throwaway database before any
# blog_backend module reads its settings.
os.environ.setdefault(
    "APP_DB_PATH",
    os.path.join(tempfile.mkdtemp(prefix="blog-api-tests-"), "app.db"),
)

from blog_backend.app.db.base import Base  # noqa: E402
from blog_backend.app.models.post_record import PostRecord  # noqa: E402, F401
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker[Session]]:
    """Yield a session factory over an in-memory SQLite with the schema created.

    StaticPool keeps a single connection so the data is visible from the
    worker threads TestClient runs sync endpoints on.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        engine.dispose()


@pytest.fixture()
def ticking_clock() -> Callable[[], datetime]:
    """A clock that advances one minute per call, for deterministic ordering."""
    start = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)
    calls = {"n": 0}

    def _now() -> datetime:
        value = start + timedelta(minutes=calls["n"])
        calls["n"] += 1
        return value

    return _now
