"""Pydantic models for blog posts as seen by API clients.

JSON uses camelCase (``markdownContent``, ``createdAt``); Python code uses
snake_case attributes.  Both spellings are accepted on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Post(BaseModel):
    """A persisted blog post."""

    model_config = _CAMEL_CONFIG

    id: str
    title: str
    markdown_content: str
    author: str
    created_at: datetime


class PostCreate(BaseModel):
    """Body of ``POST /posts``.

    Fields are optional at the schema level so that presence is checked by
    the handler and reported as a 400, not as a framework 422.
    """

    model_config = _CAMEL_CONFIG

    title: str | None = None
    markdown_content: str | None = None
    author: str | None = None


class PostUpdate(BaseModel):
    """Body of ``PUT /posts/{id}``.

    Only the mutable fields are declared; anything else in the body
    (``id``, ``createdAt``, ``_id``...) is dropped during parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    title: str | None = None
    markdown_content: str | None = None
    author: str | None = None


class DeleteConfirmation(BaseModel):
    """Body returned by a successful ``DELETE /posts/{id}``."""

    message: str = "Post deleted successfully"
    post: Post


class ErrorBody(BaseModel):
    """Shape of every failure response."""

    message: str
    category: str
    detail: str | list[dict[str, object]] | None = Field(default=None)
