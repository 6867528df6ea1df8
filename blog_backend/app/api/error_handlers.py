"""Global exception handlers for the blog API.

- RequestValidationError (unparseable JSON, wrong field types) → 400 with
  per-field details, in the same body shape as handler failures
- Exception (catch-all) → 500 with a generic message; details are logged only
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog_backend.app.core.errors import (
    normalize_request_validation_error,
    normalize_unknown_error,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        logger.warning(
            "request_rejected: path=%s errors=%d", request.url.path, len(exc.errors()),
        )
        error = normalize_request_validation_error(list(exc.errors()))
        return JSONResponse(status_code=error.http_status, content=error.to_body())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception,
    ) -> JSONResponse:
        error = normalize_unknown_error(
            exc, operation=f"{request.method} {request.url.path}",
        )
        return JSONResponse(status_code=error.http_status, content=error.to_body())
