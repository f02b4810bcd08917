"""Shared-secret credential gate for the API endpoints."""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Request

import tokens
from errors import Unauthorized
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Checked in this order; the first non-empty value wins
API_KEY_HEADERS = ("x-api-key", "x-authorization")
API_KEY_QUERY_PARAM = "api_key"

UNAUTHORIZED_MESSAGE = "Invalid or missing API key"


def extract_api_key(request: Request) -> Optional[str]:
    """Get the presented API key from headers or query string."""
    for header in API_KEY_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return request.query_params.get(API_KEY_QUERY_PARAM) or None


def verify_api_key(presented: Optional[str], expected: str) -> bool:
    """Constant-time comparison of a presented key against the configured one."""
    if not presented:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


async def require_api_key(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Dependency that rejects requests without the configured API key.

    Does nothing when no API key is configured.

    Raises:
        Unauthorized: If the key is missing or does not match
    """
    if not settings.auth_enabled:
        return

    if not verify_api_key(extract_api_key(request), settings.api_key):
        logger.warning(f"[Auth] Rejected {request.method} {request.url.path}: invalid or missing API key")
        raise Unauthorized(UNAUTHORIZED_MESSAGE)


async def require_stream_access(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Dependency for /stream: accepts the API key or a stream token bound to ``url``.

    Raises:
        Unauthorized: If neither credential is valid
    """
    if not settings.auth_enabled:
        return

    if verify_api_key(extract_api_key(request), settings.api_key):
        return

    token = request.query_params.get("token")
    url = request.query_params.get("url") or ""
    if token:
        is_valid, error = tokens.validate_stream_token(token, url, settings.api_key)
        if is_valid:
            return
        logger.warning(f"[Auth] Rejected stream token for {url}: {error}")
    else:
        logger.warning(f"[Auth] Rejected stream request for {url}: no credentials")

    raise Unauthorized(UNAUTHORIZED_MESSAGE)
