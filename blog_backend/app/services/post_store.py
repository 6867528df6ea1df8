"""Post store: the persistence collaborator behind the post handler.

The store is built from an explicit session factory and owns one session per
call.  Each method returns a value (a :class:`Post`, a list of posts or a
:class:`PostFailure`), so callers never unwind through exceptions for
"bad id", "not found" or "invalid document".
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from blog_backend.app.core.logging import (
    EVENT_DB_READ_FAILED,
    EVENT_DB_WRITE_FAILED,
    log_event,
)
from blog_backend.app.models.post import Post
from blog_backend.app.models.post_record import DEFAULT_AUTHOR, PostRecord
from blog_backend.app.models.results import FailureKind, PostFailure
from blog_backend.app.services.validation import (
    CONTENT_REQUIRED,
    TITLE_REQUIRED,
    check_post_fields,
    clean_post_fields,
    format_validation_errors,
    normalize_post_id,
)

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "markdown_content", "author")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _row_to_post(row: PostRecord) -> Post:
    """Convert a DB row to a Post Pydantic model."""
    created_at = row.created_at
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return Post(
        id=row.id,
        title=row.title,
        markdown_content=row.markdown_content,
        author=row.author,
        created_at=created_at,
    )


def _malformed(raw_id: str) -> PostFailure:
    return PostFailure(
        kind=FailureKind.malformed_id,
        detail=f"'{raw_id}' is not a valid post identifier",
        post_id=raw_id,
    )


def _not_found(post_id: str) -> PostFailure:
    return PostFailure(
        kind=FailureKind.not_found,
        detail=f"Post not found: id={post_id}",
        post_id=post_id,
    )


_CHECK_MESSAGES = {
    "ck_posts_title_not_empty": f"title: {TITLE_REQUIRED}",
    "ck_posts_markdown_content_not_empty": f"markdownContent: {CONTENT_REQUIRED}",
}


def _violated_check(exc: SQLAlchemyError) -> list[str]:
    """Return the field messages for the CHECK constraints *exc* reports."""
    if not isinstance(exc, IntegrityError):
        return []
    raw = str(exc.orig)
    if "CHECK constraint failed" not in raw:
        return []
    matched = [msg for name, msg in _CHECK_MESSAGES.items() if name in raw]
    return matched or ["document: A post must have a title and content."]


def _db_failure(
    exc: SQLAlchemyError,
    operation: str,
    *,
    event: str,
    post_id: str | None = None,
) -> PostFailure:
    """Log a database error and turn it into a typed failure.

    Violations of the ``ck_posts_*`` CHECK constraints are schema failures
    (400); every other database error, other integrity faults included, is a
    persistence failure (500).
    """
    violated = _violated_check(exc)
    if violated:
        kind = FailureKind.validation
        detail = format_validation_errors(violated)
    else:
        kind = FailureKind.persistence
        detail = f"{type(exc).__name__}: {getattr(exc, 'orig', None) or exc}"
    log_event(
        logger, "error", event,
        operation=operation,
        error_category=kind.value,
        post_id=post_id or "N/A",
        detail=detail,
    )
    return PostFailure(kind=kind, detail=detail, post_id=post_id)


class PostStore:
    """Document-style CRUD over the ``posts`` table."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def insert(self, fields: dict[str, object]) -> Post | PostFailure:
        """Validate and persist a new post; the store assigns ``id`` and ``created_at``."""
        document = clean_post_fields(
            {k: v for k, v in fields.items() if k in MUTABLE_FIELDS}
        )
        if document.get("author") is None:
            document["author"] = DEFAULT_AUTHOR
        errors = check_post_fields(document)
        if errors:
            return PostFailure(
                kind=FailureKind.validation,
                detail=format_validation_errors(errors),
            )

        row = PostRecord(
            id=uuid.uuid4().hex,
            created_at=self._clock(),
            **document,
        )
        with self._session_factory() as db:
            try:
                db.add(row)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                return _db_failure(exc, "insert", event=EVENT_DB_WRITE_FAILED)
            return _row_to_post(row)

    def find_all_newest_first(self) -> list[Post] | PostFailure:
        """Return every post ordered by ``created_at`` descending."""
        with self._session_factory() as db:
            try:
                rows = db.scalars(
                    select(PostRecord).order_by(PostRecord.created_at.desc())
                ).all()
            except SQLAlchemyError as exc:
                return _db_failure(exc, "find_all", event=EVENT_DB_READ_FAILED)
            return [_row_to_post(r) for r in rows]

    def find_by_id(self, raw_id: str) -> Post | PostFailure:
        """Fetch a single post; the identifier format is checked before lookup."""
        post_id = normalize_post_id(raw_id)
        if post_id is None:
            return _malformed(raw_id)

        with self._session_factory() as db:
            try:
                row = db.get(PostRecord, post_id)
            except SQLAlchemyError as exc:
                return _db_failure(
                    exc, "find_by_id", event=EVENT_DB_READ_FAILED, post_id=post_id,
                )
            if row is None:
                return _not_found(post_id)
            return _row_to_post(row)

    def update_by_id(
        self, raw_id: str, fields: dict[str, object],
    ) -> Post | PostFailure:
        """Apply the mutable subset of *fields* and return the updated post.

        ``id`` and ``created_at`` are never written, whatever *fields* holds.
        """
        post_id = normalize_post_id(raw_id)
        if post_id is None:
            return _malformed(raw_id)

        changes = clean_post_fields(
            {k: v for k, v in fields.items() if k in MUTABLE_FIELDS}
        )
        errors = check_post_fields(changes, partial=True)
        if errors:
            return PostFailure(
                kind=FailureKind.validation,
                detail=format_validation_errors(errors),
                post_id=post_id,
            )

        with self._session_factory() as db:
            try:
                row = db.get(PostRecord, post_id)
                if row is None:
                    return _not_found(post_id)
                for key, value in changes.items():
                    setattr(row, key, value)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                return _db_failure(
                    exc, "update_by_id", event=EVENT_DB_WRITE_FAILED, post_id=post_id,
                )
            return _row_to_post(row)

    def delete_by_id(self, raw_id: str) -> Post | PostFailure:
        """Remove a post and return the deleted document."""
        post_id = normalize_post_id(raw_id)
        if post_id is None:
            return _malformed(raw_id)

        with self._session_factory() as db:
            try:
                row = db.get(PostRecord, post_id)
                if row is None:
                    return _not_found(post_id)
                deleted = _row_to_post(row)
                db.delete(row)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                return _db_failure(
                    exc, "delete_by_id", event=EVENT_DB_WRITE_FAILED, post_id=post_id,
                )
            return deleted
