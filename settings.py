"""Immutable runtime settings built once from config."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

import config

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Application settings shared read-only by all requests."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    public_base_url: Optional[str] = None
    stream_token_ttl: int = Field(default=24 * 60 * 60, ge=60)

    # yt-dlp
    ytdlp_path: str = Field(default="yt-dlp")
    ytdlp_skip_tls_verify: bool = False

    # Streaming
    stream_chunk_size: int = Field(default=256 * 1024, ge=1024)
    stream_buffer_limit: int = Field(default=1 << 25, ge=64 * 1024)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_key)


_cached_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get current settings (built on first access)."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = load_settings()
    return _cached_settings


def load_settings() -> Settings:
    """Build settings from environment-derived config values."""
    settings = Settings(
        api_key=config.API_KEY,
        public_base_url=config.PUBLIC_BASE_URL,
        stream_token_ttl=config.STREAM_TOKEN_TTL,
        ytdlp_path=config.YTDLP_PATH,
        ytdlp_skip_tls_verify=config.YTDLP_SKIP_TLS_VERIFY,
    )
    logger.info(f"Settings loaded (auth enabled: {settings.auth_enabled})")
    return settings


def invalidate_cache() -> None:
    """Force settings to be rebuilt from config on next access."""
    global _cached_settings
    _cached_settings = None
