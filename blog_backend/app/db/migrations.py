"""Brings the posts schema to the newest Alembic revision at startup."""

import logging

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from blog_backend.app.core.logging import (
    EVENT_DB_MIGRATION_FAILED,
    EVENT_DB_MIGRATION_STARTED,
    EVENT_DB_MIGRATION_SUCCEEDED,
    log_event,
    setup_logging,
)
from blog_backend.app.core.settings import _PROJECT_ROOT
from blog_backend.app.db.engine import engine

logger = logging.getLogger(__name__)


class MigrationError(Exception):
    """The posts schema could not be upgraded."""


def _alembic_config() -> Config:
    return Config(str(_PROJECT_ROOT / "alembic.ini"))


def get_current_revision() -> str | None:
    """Revision stamped in the posts database, or None before the first upgrade."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def get_head_revision() -> str:
    script = ScriptDirectory.from_config(_alembic_config())
    return script.get_current_head()  # type: ignore[return-value]


def check_schema_current() -> bool:
    """Return False, with a warning, when the database lags the newest revision."""
    current, head = get_current_revision(), get_head_revision()
    if current == head:
        return True
    log_event(
        logger, "warning", "db_schema_drift",
        current=current, head=head, hint="run 'make migrate'",
    )
    return False


def run_migrations() -> None:
    """Upgrade to ``head``, raising :class:`MigrationError` on failure."""
    current, head = get_current_revision(), get_head_revision()
    log_event(logger, "info", EVENT_DB_MIGRATION_STARTED, current=current, head=head)
    if current == head:
        log_event(logger, "info", EVENT_DB_MIGRATION_SUCCEEDED, status="already at head")
        return

    try:
        command.upgrade(_alembic_config(), "head")
    except Exception as exc:
        log_event(
            logger, "exception", EVENT_DB_MIGRATION_FAILED,
            current=current, target="head", error=exc,
        )
        raise MigrationError(
            f"Migration failed (current={current}, target=head): {exc}. "
            f"Check alembic/versions/ for the failing revision."
        ) from exc
    finally:
        # env.py runs fileConfig(), which replaces the root handlers.
        setup_logging()
    log_event(logger, "info", EVENT_DB_MIGRATION_SUCCEEDED, head=head)
