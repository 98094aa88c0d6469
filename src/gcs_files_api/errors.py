"""Exception taxonomy and the app-level handlers that render errors as ``{"error": ...}``."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FilesApiError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(FilesApiError):
    """The storage provider identity is missing or malformed."""


class BadRequestError(FilesApiError):
    """A required request input is missing."""


class ProviderError(FilesApiError):
    """The storage SDK reported a failure: network, permission, quota, ..."""


class NotFoundError(ProviderError):
    """The named object does not exist in the bucket."""


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render ``HTTPException`` with the ``{"error": ...}`` body clients expect."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_bad_request_errors(request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input is a bad request; the validation details stay in the log."""
    logger.warning("Invalid request to %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"},
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
