"""Shared dependencies for the API routers."""

from typing import Optional

from fastapi import Depends

from media_source import MediaSource, YtDlpSource
from settings import Settings, get_settings

_media_source: Optional[MediaSource] = None


def get_media_source(settings: Settings = Depends(get_settings)) -> MediaSource:
    """Dependency returning the process-wide media source (created on first use)."""
    global _media_source
    if _media_source is None:
        _media_source = YtDlpSource.from_settings(settings)
    return _media_source
