"""CRUD endpoints for blog posts."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from blog_backend.app.core.errors import ClassifiedError
from blog_backend.app.core.settings import settings
from blog_backend.app.db.session import get_post_store
from blog_backend.app.models.post import (
    DeleteConfirmation,
    ErrorBody,
    Post,
    PostCreate,
    PostUpdate,
)
from blog_backend.app.services.post_handler import HandlerResult, PostHandler
from blog_backend.app.services.post_store import PostStore

router = APIRouter()

_BAD_REQUEST = {400: {"model": ErrorBody, "description": "Invalid id or post fields"}}
_NOT_FOUND = {404: {"model": ErrorBody, "description": "Post not found"}}
_SERVER_ERROR = {500: {"model": ErrorBody, "description": "Persistence failure"}}


def get_post_handler(store: PostStore = Depends(get_post_store)) -> PostHandler:
    """Build a handler around the request's store."""
    return PostHandler(store, expose_failure_detail=settings.debug)


def _render(result: HandlerResult) -> JSONResponse:
    """Serialize a handler result descriptor into a JSON response."""
    if isinstance(result, ClassifiedError):
        return JSONResponse(status_code=result.http_status, content=result.to_body())

    payload = result.payload
    if isinstance(payload, list):
        content: object = [p.model_dump(mode="json", by_alias=True) for p in payload]
    else:
        content = payload.model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=result.status_code, content=content)


@router.post(
    "/posts",
    response_model=Post,
    status_code=201,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
def create_post(
    body: PostCreate | None = None,
    handler: PostHandler = Depends(get_post_handler),
) -> JSONResponse:
    """Create a post from ``title``, ``markdownContent`` and optional ``author``."""
    return _render(handler.create(body or PostCreate()))


@router.get("/posts", response_model=list[Post], responses=_SERVER_ERROR)
def list_posts(handler: PostHandler = Depends(get_post_handler)) -> JSONResponse:
    """Return all posts, newest first."""
    return _render(handler.list())


@router.get(
    "/posts/{post_id}",
    response_model=Post,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def get_post(
    post_id: str, handler: PostHandler = Depends(get_post_handler),
) -> JSONResponse:
    """Return a single post by id."""
    return _render(handler.get(post_id))


@router.put(
    "/posts/{post_id}",
    response_model=Post,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def update_post(
    post_id: str,
    body: PostUpdate | None = None,
    handler: PostHandler = Depends(get_post_handler),
) -> JSONResponse:
    """Update any subset of ``title``, ``markdownContent`` and ``author``."""
    return _render(handler.update(post_id, body or PostUpdate()))


@router.delete(
    "/posts/{post_id}",
    response_model=DeleteConfirmation,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def delete_post(
    post_id: str, handler: PostHandler = Depends(get_post_handler),
) -> JSONResponse:
    """Delete a post and return it in the confirmation."""
    return _render(handler.delete(post_id))
