"""Error classification for post operations.

Every failure that reaches a client passes through this module so that:
- Status codes follow one table (validation/malformed id → 400,
  not found → 404, persistence → 500)
- Messages are human-readable and never carry stack traces or secrets
- Persistence detail is attached only when explicitly requested (debug)
"""

import logging
from dataclasses import dataclass

from blog_backend.app.core.logging import log_event
from blog_backend.app.models.results import FailureKind, PostFailure, PostOperation

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Post not found"

_PERSISTENCE_MESSAGES: dict[PostOperation, str] = {
    PostOperation.create: "Error creating post",
    PostOperation.list: "Error fetching posts",
    PostOperation.get: "Error fetching post",
    PostOperation.update: "Error updating post",
    PostOperation.delete: "Error deleting post",
}


@dataclass(frozen=True)
class ClassifiedError:
    """Response outcome for a failed operation."""

    message: str
    error_category: str
    http_status: int
    detail: str | list[dict[str, object]] | None = None

    def to_body(self) -> dict[str, object]:
        """Render as the JSON failure body (``detail`` omitted when empty)."""
        body: dict[str, object] = {
            "message": self.message,
            "category": self.error_category,
        }
        if self.detail is not None:
            body["detail"] = self.detail
        return body


def classify_failure(
    failure: PostFailure,
    *,
    operation: PostOperation,
    expose_detail: bool = False,
) -> ClassifiedError:
    """Map a typed post failure to its HTTP outcome.

    Pure: no logging, no I/O.  Identifier-format failures are produced by
    the store before any lookup, so they can never surface as a 404.
    """
    kind = failure.kind
    if kind is FailureKind.malformed_id:
        return ClassifiedError(
            message=f"Invalid post ID format: {failure.post_id}",
            error_category=kind.value,
            http_status=400,
        )
    if kind is FailureKind.validation:
        return ClassifiedError(
            message=failure.detail,
            error_category=kind.value,
            http_status=400,
        )
    if kind is FailureKind.not_found:
        return ClassifiedError(
            message=NOT_FOUND_MESSAGE,
            error_category=kind.value,
            http_status=404,
        )
    return ClassifiedError(
        message=_PERSISTENCE_MESSAGES[operation],
        error_category=FailureKind.persistence.value,
        http_status=500,
        detail=failure.detail if expose_detail else None,
    )


def normalize_request_validation_error(
    errors: list[dict],
) -> ClassifiedError:
    """Turn framework body-parsing errors (bad JSON, wrong types) into a 400."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e.get("loc", ())),
            "message": e.get("msg", ""),
            "type": e.get("type", ""),
        }
        for e in errors
    ]
    return ClassifiedError(
        message="Invalid request body.",
        error_category=FailureKind.validation.value,
        http_status=400,
        detail=details,
    )


def normalize_unknown_error(
    exc: Exception,
    *,
    operation: str,
) -> ClassifiedError:
    """Normalize an unexpected error into a safe generic message."""
    log_event(
        logger, "exception", "unknown_error",
        operation=operation,
        error_category="unknown",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return ClassifiedError(
        message="An unexpected error occurred. Please try again.",
        error_category="unknown",
        http_status=500,
    )
