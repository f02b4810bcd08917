"""Stream proxy endpoint: relays the audio track of a YouTube video."""

import logging
from typing import AsyncIterator, Optional

import anyio
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from auth import require_stream_access
from errors import InternalError, InvalidURL, MalformedRequest, UpstreamFailure
from media_source import MediaError, MediaSource, is_youtube_url
from routers.deps import get_media_source

router = APIRouter(tags=["stream"])
logger = logging.getLogger(__name__)

AUDIO_MEDIA_TYPE = "audio/mpeg"


async def relay_stream(upstream: AsyncIterator[bytes], first_chunk: bytes, url: str) -> AsyncIterator[bytes]:
    """Yield the already-read first chunk, then every remaining upstream chunk in order.

    Errors after the response has started are logged and re-raised so the
    server drops the connection without a terminating chunk. The upstream is
    always closed, including when the client disconnects.
    """
    bytes_sent = 0
    try:
        if first_chunk:
            bytes_sent += len(first_chunk)
            yield first_chunk
        async for chunk in upstream:
            bytes_sent += len(chunk)
            yield chunk
        logger.info(f"[Stream] Completed {url}: {bytes_sent} bytes")
    except (MediaError, OSError) as e:
        logger.error(f"[Stream] Stream error for {url} after {bytes_sent} bytes: {e}")
        raise
    finally:
        # Shielded so teardown still runs when the request task is cancelled
        with anyio.CancelScope(shield=True):
            await upstream.aclose()


@router.get("/stream", dependencies=[Depends(require_stream_access)])
async def stream_audio(
    url: Optional[str] = None,
    source: MediaSource = Depends(get_media_source),
):
    """Stream only the audio track of a YouTube video."""
    if not url:
        raise MalformedRequest("Missing url parameter", plain_text=True)

    if not is_youtube_url(url) or not source.validate(url):
        raise InvalidURL("Invalid YouTube URL", plain_text=True)

    logger.info(f"[Stream] Streaming audio for: {url}")

    upstream = None
    try:
        upstream = source.open_audio_stream(url)
        first_chunk = await upstream.__anext__()
    except StopAsyncIteration:
        first_chunk = b""
    except MediaError as e:
        logger.error(f"[Stream] Stream error for {url}: {e}")
        if upstream is not None:
            await upstream.aclose()
        raise UpstreamFailure("Error while streaming", plain_text=True)
    except Exception as e:
        logger.error(f"[Stream] Error opening stream for {url}: {e}", exc_info=True)
        if upstream is not None:
            await upstream.aclose()
        raise InternalError("Internal server error", plain_text=True)

    return StreamingResponse(
        relay_stream(upstream, first_chunk, url),
        media_type=AUDIO_MEDIA_TYPE,
        headers={"Transfer-Encoding": "chunked"},
    )
