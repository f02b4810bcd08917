"""HTTP error taxonomy and its FastAPI exception handlers."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error that maps directly to an HTTP response.

    Args:
        message: Short diagnostic sent to the client
        plain_text: Render as text/plain instead of a JSON ``{"error": ...}`` body
    """

    status_code = 500

    def __init__(self, message: str, plain_text: bool = False):
        super().__init__(message)
        self.message = message
        self.plain_text = plain_text


class MalformedRequest(ApiError):
    """A required field or parameter is missing."""

    status_code = 400


class InvalidURL(ApiError):
    """A URL is present but fails structural validation."""

    status_code = 400


class Unauthorized(ApiError):
    """Shared secret or stream token missing or wrong."""

    status_code = 401


class UpstreamFailure(ApiError):
    """The media source failed before any byte was sent."""

    status_code = 500


class InternalError(ApiError):
    """Unexpected failure before any byte was sent."""

    status_code = 500


async def api_error_handler(request: Request, exc: ApiError) -> Response:
    if exc.plain_text:
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Report unparseable request bodies the same way as a missing url."""
    logger.debug(f"Request validation failed for {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": "Missing url in body"}, status_code=400)
