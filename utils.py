"""Utility functions for DJ Audio API."""

import urllib.parse
from typing import Optional

from fastapi import Request

# Characters encodeURIComponent leaves unescaped besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def get_base_url(request: Request) -> str:
    """Get base URL respecting X-Forwarded-Proto header from reverse proxies.

    When running behind a reverse proxy (like Nginx or a PaaS router), the
    internal connection uses HTTP even if the client connected via HTTPS.
    This function checks the X-Forwarded-Proto header to return the correct scheme.
    """
    base_url = str(request.base_url).rstrip("/")

    forwarded_proto = request.headers.get("X-Forwarded-Proto")
    if forwarded_proto:
        # First value wins when proxies are chained ("https,http")
        forwarded_proto = forwarded_proto.split(",")[0].strip().lower()
        if base_url.startswith("http://") and forwarded_proto == "https":
            base_url = "https://" + base_url[7:]
        elif base_url.startswith("https://") and forwarded_proto == "http":
            base_url = "http://" + base_url[8:]

    return base_url


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way JavaScript's encodeURIComponent does."""
    return urllib.parse.quote(value, safe=_URI_COMPONENT_SAFE)


def build_stream_url(base_url: str, url: str, token: Optional[str] = None) -> str:
    """Build the /stream link for a source URL.

    Args:
        base_url: Public origin of this service (trailing slash tolerated)
        url: The original video URL, embedded percent-encoded
        token: Optional stream token appended as ``token`` query parameter
    """
    stream_url = f"{base_url.rstrip('/')}/stream?url={encode_uri_component(url)}"
    if token:
        stream_url = f"{stream_url}&token={encode_uri_component(token)}"
    return stream_url
