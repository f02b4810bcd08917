"""Media-resolution capability: YouTube URL handling and audio streams."""

from media_source._base import MediaSource
from media_source._sanitize import (
    MediaError,
    build_watch_url,
    get_video_id,
    is_youtube_url,
    validate_url,
)
from media_source._ytdlp import YtDlpSource

__all__ = [
    # _base
    "MediaSource",
    # _sanitize
    "MediaError",
    "is_youtube_url",
    "get_video_id",
    "validate_url",
    "build_watch_url",
    # _ytdlp
    "YtDlpSource",
]
