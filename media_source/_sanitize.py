"""MediaError, YouTube URL classification and validation."""

import logging
import re
import urllib.parse

logger = logging.getLogger(__name__)

YOUTUBE_DOMAINS = ("youtube.com", "youtu.be")

# Hosts whose video id is carried in the "v" query parameter
VALID_QUERY_DOMAINS = frozenset(
    [
        "youtube.com",
        "www.youtube.com",
        "m.youtube.com",
        "music.youtube.com",
        "gaming.youtube.com",
    ]
)

# URLs whose video id is a path segment
VALID_PATH_DOMAINS = re.compile(r"^https?://(youtu\.be/|(www\.)?youtube\.com/(embed|v|shorts|live)/)")

VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")


class MediaError(Exception):
    """Error from the media source (extraction or streaming)."""

    pass


def is_youtube_url(url) -> bool:
    """Check whether a URL points at YouTube (case-insensitive substring match)."""
    if not url or not isinstance(url, str):
        return False
    lowered = url.lower()
    return any(domain in lowered for domain in YOUTUBE_DOMAINS)


def get_video_id(url: str) -> str:
    """Extract the 11-character video ID from a YouTube URL.

    Accepts watch URLs on the query domains (``?v=<id>``) and path URLs
    (``youtu.be/<id>``, ``/embed/<id>``, ``/v/<id>``, ``/shorts/<id>``,
    ``/live/<id>``).

    Raises:
        ValueError: If the URL is not a YouTube video URL
    """
    link = url.strip()
    parsed = urllib.parse.urlparse(link)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    hostname = parsed.hostname

    query = urllib.parse.parse_qs(parsed.query)
    video_id = query.get("v", [None])[0]

    if VALID_PATH_DOMAINS.match(link) and not video_id:
        paths = parsed.path.split("/")
        index = 1 if parsed.netloc == "youtu.be" else 2
        video_id = paths[index] if len(paths) > index else None
    elif hostname and hostname not in VALID_QUERY_DOMAINS:
        raise ValueError(f"Not a YouTube domain: {url}")

    if not video_id:
        raise ValueError(f"No video id found: {url}")

    video_id = video_id[:11]
    if not VIDEO_ID_PATTERN.match(video_id):
        raise ValueError(f"Invalid video ID format: {video_id}")
    return video_id


def validate_url(url: str) -> bool:
    """Validate a YouTube URL against the platform's URL grammar."""
    try:
        get_video_id(url)
        return True
    except (ValueError, AttributeError, TypeError):
        return False


def build_watch_url(video_id: str) -> str:
    """Canonical watch URL for a validated video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"
