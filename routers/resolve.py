"""Resolve endpoint: turns any URL into a directly playable audio URL."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

import tokens
from auth import require_api_key
from errors import InvalidURL, MalformedRequest
from media_source import MediaSource, is_youtube_url
from models import ErrorResponse, ResolveRequest, ResolveResponse
from routers.deps import get_media_source
from settings import Settings, get_settings
from utils import build_stream_url, get_base_url

router = APIRouter(tags=["resolve"], dependencies=[Depends(require_api_key)])
logger = logging.getLogger(__name__)


@router.post(
    "/resolve",
    response_model=ResolveResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def resolve(
    request: Request,
    payload: Optional[ResolveRequest] = None,
    settings: Settings = Depends(get_settings),
    source: MediaSource = Depends(get_media_source),
):
    """Resolve a URL to an audio URL.

    Non-YouTube URLs are assumed to be directly playable and are returned
    unchanged. YouTube URLs are validated and rewritten to this service's
    /stream endpoint.
    """
    url = payload.url if payload else None
    if not url:
        raise MalformedRequest("Missing url in body")

    if not is_youtube_url(url):
        return ResolveResponse(audio_url=url)

    if not source.validate(url):
        logger.info(f"[Resolve] Rejected invalid YouTube URL: {url}")
        raise InvalidURL("Invalid YouTube URL")

    base_url = settings.public_base_url or get_base_url(request)
    token = None
    if settings.auth_enabled:
        token = tokens.generate_stream_token(url, settings.api_key, settings.stream_token_ttl)

    stream_url = build_stream_url(base_url, url, token)
    logger.info(f"[Resolve] {url} -> {base_url}/stream")
    return ResolveResponse(audio_url=stream_url)
