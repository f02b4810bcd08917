"""Configuration for DJ Audio API.

All settings are read once at startup from environment variables.
"""

import os

# Server settings
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Optional shared secret. When unset, the API is open.
API_KEY = os.getenv("API_KEY") or None

# Public base URL used to build /stream links (e.g., "https://dj-audio.example.com")
# Falls back to the scheme and host of the incoming request when unset.
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL") or None

# Lifetime of the signed tokens embedded in /stream links (seconds)
STREAM_TOKEN_TTL = int(os.getenv("STREAM_TOKEN_TTL", str(24 * 60 * 60)))

# yt-dlp executable
YTDLP_PATH = os.getenv("YTDLP_PATH", "yt-dlp")

# Skip TLS certificate verification in yt-dlp (not recommended for production)
YTDLP_SKIP_TLS_VERIFY = os.getenv("YTDLP_SKIP_TLS_VERIFY", "false").lower() in ("true", "1", "yes")

# CORS settings
# Comma-separated list of allowed origins (e.g., "https://app.example.com,https://admin.example.com")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

# Allow all origins - credentials will be DISABLED in this mode
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "true").lower() in ("true", "1", "yes")

# Allow credentials (cookies, authorization headers) - only works with specific origins
CORS_ALLOW_CREDENTIALS = os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() in ("true", "1", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Debug mode (enables auto-reload in development)
DEBUG = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")
