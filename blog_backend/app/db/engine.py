"""SQLAlchemy engine for the SQLite post store."""

import logging
from pathlib import Path

from sqlalchemy import create_engine, text

from blog_backend.app.core.logging import EVENT_DB_INITIALIZED, log_event
from blog_backend.app.core.settings import settings

logger = logging.getLogger(__name__)

# Settings validation has already created the parent directory.
_db_path = Path(settings.app_db_path)


def get_resolved_db_path() -> Path:
    """Return the resolved absolute path to the SQLite database file."""
    return _db_path.resolve()


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False},  # sessions move between worker threads
)

log_event(
    logger, "info", EVENT_DB_INITIALIZED,
    path=get_resolved_db_path(),
)


class DatabaseInitError(Exception):
    """Raised when the post store cannot be reached at startup."""


def init_db() -> None:
    """Probe the database with ``SELECT 1`` before the API starts serving.

    Raises :class:`DatabaseInitError` with actionable guidance on failure,
    which aborts application startup.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        msg = (
            f"Cannot open the post store at '{_db_path}' ({exc}); "
            f"set APP_DB_PATH to a writable location."
        )
        logger.error("db_init_failed: %s", msg)
        raise DatabaseInitError(msg) from exc
    logger.info("db_init_verified: path=%s", _db_path)
