"""Post resource handler: validation, store invocation and error classification.

One handler method per HTTP operation.  Each returns a result descriptor:
:class:`HandlerSuccess` with a status code and payload, or the
:class:`ClassifiedError` the route should send back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blog_backend.app.core.errors import ClassifiedError, classify_failure
from blog_backend.app.core.logging import (
    EVENT_POST_CREATED,
    EVENT_POST_DELETED,
    EVENT_POST_REQUEST_FAILED,
    EVENT_POST_UPDATED,
    log_event,
)
from blog_backend.app.models.post import DeleteConfirmation, Post, PostCreate, PostUpdate
from blog_backend.app.models.post_record import DEFAULT_AUTHOR
from blog_backend.app.models.results import FailureKind, PostFailure, PostOperation
from blog_backend.app.services.post_store import MUTABLE_FIELDS, PostStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please provide a title and content for the post."


@dataclass(frozen=True)
class HandlerSuccess:
    """Successful outcome: HTTP status plus the payload to serialize."""

    status_code: int
    payload: Post | list[Post] | DeleteConfirmation


HandlerResult = HandlerSuccess | ClassifiedError


class PostHandler:
    """Implements the five post operations against an injected store."""

    def __init__(self, store: PostStore, *, expose_failure_detail: bool = False) -> None:
        self._store = store
        self._expose_failure_detail = expose_failure_detail

    def _fail(self, failure: PostFailure, operation: PostOperation) -> ClassifiedError:
        error = classify_failure(
            failure,
            operation=operation,
            expose_detail=self._expose_failure_detail,
        )
        log_event(
            logger, "warning" if error.http_status < 500 else "error",
            EVENT_POST_REQUEST_FAILED,
            operation=operation.value,
            error_category=error.error_category,
            status=error.http_status,
            post_id=failure.post_id or "N/A",
        )
        return error

    def create(self, body: PostCreate) -> HandlerResult:
        """Create a post; title and content must be present and non-empty."""
        if not body.title or not body.markdown_content:
            return self._fail(
                PostFailure(kind=FailureKind.validation, detail=MISSING_FIELDS_MESSAGE),
                PostOperation.create,
            )

        result = self._store.insert(
            {
                "title": body.title,
                "markdown_content": body.markdown_content,
                "author": body.author if body.author is not None else DEFAULT_AUTHOR,
            }
        )
        if isinstance(result, PostFailure):
            return self._fail(result, PostOperation.create)

        log_event(
            logger, "info", EVENT_POST_CREATED,
            post_id=result.id,
            title_len=len(result.title),
            content_len=len(result.markdown_content),
        )
        return HandlerSuccess(status_code=201, payload=result)

    def list(self) -> HandlerResult:
        """Return every post, newest first."""
        result = self._store.find_all_newest_first()
        if isinstance(result, PostFailure):
            return self._fail(result, PostOperation.list)
        return HandlerSuccess(status_code=200, payload=result)

    def get(self, post_id: str) -> HandlerResult:
        result = self._store.find_by_id(post_id)
        if isinstance(result, PostFailure):
            return self._fail(result, PostOperation.get)
        return HandlerSuccess(status_code=200, payload=result)

    def update(self, post_id: str, body: PostUpdate) -> HandlerResult:
        """Replace any subset of title, markdown content and author.

        Only fields the client actually sent are forwarded, and only the
        mutable ones; ``id`` and ``createdAt`` cannot be changed here.
        """
        sent = body.model_dump(exclude_unset=True)
        fields = {k: v for k, v in sent.items() if k in MUTABLE_FIELDS}

        if fields:
            result = self._store.update_by_id(post_id, fields)
        else:
            result = self._store.find_by_id(post_id)
        if isinstance(result, PostFailure):
            return self._fail(result, PostOperation.update)

        if fields:
            log_event(
                logger, "info", EVENT_POST_UPDATED,
                post_id=result.id,
                fields=",".join(sorted(fields)),
            )
        return HandlerSuccess(status_code=200, payload=result)

    def delete(self, post_id: str) -> HandlerResult:
        """Delete a post; deleting it again reports not found."""
        result = self._store.delete_by_id(post_id)
        if isinstance(result, PostFailure):
            return self._fail(result, PostOperation.delete)

        log_event(logger, "info", EVENT_POST_DELETED, post_id=result.id)
        return HandlerSuccess(
            status_code=200, payload=DeleteConfirmation(post=result),
        )
