"""DJ Audio API - resolves URLs to playable audio and proxies YouTube audio via yt-dlp."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

import config
from errors import ApiError, api_error_handler, validation_error_handler
from routers import health, resolve, stream
from settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure the root logger from LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    s = get_settings()
    if s.auth_enabled:
        logger.info("API key protection enabled for /resolve and /stream")
    else:
        logger.warning("API_KEY not set - endpoints are open")
    if s.public_base_url:
        logger.info(f"Stream links use public base URL: {s.public_base_url}")
    yield
    logger.info("DJ Audio API shutting down")


app = FastAPI(
    title="DJ Audio API",
    description="Resolves URLs to playable audio and streams the audio track of YouTube videos",
    version="1.0.0",
    lifespan=lifespan,
)


CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "X-API-Key", "X-Authorization"]


def configure_cors(app: FastAPI) -> None:
    """Add CORSMiddleware for browser-based players.

    CORS_ORIGINS takes precedence and is the only mode that may send
    credentials. Otherwise CORS_ALLOW_ALL (on by default) serves "*".
    With both off, cross-origin requests get no CORS headers.
    """
    allow_credentials = False
    if config.CORS_ORIGINS:
        origins = [o.strip() for o in config.CORS_ORIGINS.split(",") if o.strip()]
        allow_credentials = config.CORS_ALLOW_CREDENTIALS
    elif config.CORS_ALLOW_ALL:
        origins = ["*"]
    else:
        logger.info("CORS disabled (CORS_ALLOW_ALL=false, no CORS_ORIGINS)")
        return

    logger.info(f"CORS origins: {origins} (credentials: {allow_credentials})")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds nosniff, frame-deny and referrer headers to every response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def register_routes(app: FastAPI) -> None:
    """Attach error handlers and routers."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(health.router)
    app.include_router(resolve.router)
    app.include_router(stream.router)


app.add_middleware(SecurityHeadersMiddleware)
configure_cors(app)
register_routes(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server:app", host=config.HOST, port=config.PORT, reload=config.DEBUG)
