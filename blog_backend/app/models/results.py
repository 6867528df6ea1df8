"""Result values shared by the post store and the post handler.

Store operations return either a :class:`~blog_backend.app.models.post.Post`
(or a list of them) or a :class:`PostFailure`; expected outcomes such as
"not found" never travel as exceptions.
"""

from dataclasses import dataclass
from enum import StrEnum


class FailureKind(StrEnum):
    """Closed set of ways a post operation can fail."""

    validation = "validation"
    malformed_id = "malformed_id"
    not_found = "not_found"
    persistence = "persistence"


class PostOperation(StrEnum):
    """Handler operations, used to pick messages and label log lines."""

    create = "create"
    list = "list"
    get = "get"
    update = "update"
    delete = "delete"


@dataclass(frozen=True)
class PostFailure:
    """A typed failure returned by the store or built by handler pre-checks."""

    kind: FailureKind
    detail: str
    post_id: str | None = None
