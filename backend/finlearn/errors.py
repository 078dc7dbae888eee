"""
Error responses for the API.

Every error leaves the service as ``{"error": str, "message"?: str}``.
Handlers raise ``ApiError`` for client mistakes (400/404) and wrap their
store calls in ``store_errors`` so that database failures are logged and
surfaced as a short 500 without leaking internals.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error with a fixed-shape JSON body."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str | None = None,
        **extra: Any,
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        body.update(self.extra)
        return body


def bad_request(error: str) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, error)


def not_found(error: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, error)


@contextmanager
def store_errors(error: str) -> Iterator[None]:
    """
    Turn data-store failures inside the block into a logged 500.

        with store_errors("Failed to fetch modules"):
            result = await db.execute(query)

    ``ApiError`` raised inside the block passes through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(error)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, error) from exc


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, wrong types and bad path params are client errors."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "message": details},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Router-level errors (unknown path, wrong method) in the same body shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def catch_unhandled_errors(request: Request, call_next) -> Response:
    """
    Last-resort 500 for anything the handlers above don't cover.

    Runs as middleware rather than as an ``Exception`` handler, which
    Starlette re-raises after responding (and the server logs again).
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers. Call before adding CORS so 500s still get CORS headers."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.middleware("http")(catch_unhandled_errors)
