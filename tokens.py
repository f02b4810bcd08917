"""Signed stream tokens embedded in /stream links when an API key is set."""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Token expiry in seconds (24 hours)
DEFAULT_EXPIRY_SECONDS = 24 * 60 * 60


def _url_digest(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def _sign(secret: str, payload: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()


def generate_stream_token(url: str, secret: str, expiry_seconds: int = DEFAULT_EXPIRY_SECONDS) -> str:
    """Generate a time-limited signed token for streaming one URL.

    Args:
        url: The source URL the token grants access to
        secret: The shared API key used as signing key
        expiry_seconds: Token validity period in seconds (default: 24 hours)

    Returns:
        URL-safe base64 encoded token string
    """
    expiry_timestamp = int(time.time()) + expiry_seconds

    # Create payload: url_digest:expiry_timestamp
    payload = f"{_url_digest(url)}:{expiry_timestamp}"
    signature = _sign(secret, payload)

    token_data = f"{payload}:{base64.urlsafe_b64encode(signature).decode('utf-8')}"
    return base64.urlsafe_b64encode(token_data.encode("utf-8")).decode("utf-8")


def validate_stream_token(token: str, url: str, secret: str) -> Tuple[bool, Optional[str]]:
    """Validate a streaming token for a URL.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not token:
        return (False, "Missing token")

    try:
        token_data = base64.urlsafe_b64decode(token.encode("utf-8")).decode("utf-8")

        # Split into parts: url_digest:expiry:signature
        parts = token_data.rsplit(":", 1)
        if len(parts) != 2:
            return (False, "Invalid token format")

        payload = parts[0]
        provided_signature = base64.urlsafe_b64decode(parts[1].encode("utf-8"))

        if not hmac.compare_digest(provided_signature, _sign(secret, payload)):
            return (False, "Invalid signature")

        payload_parts = payload.split(":")
        if len(payload_parts) != 2:
            return (False, "Invalid payload format")

        token_digest = payload_parts[0]
        expiry_timestamp = int(payload_parts[1])

        if time.time() > expiry_timestamp:
            return (False, "Token expired")

        if not hmac.compare_digest(token_digest, _url_digest(url)):
            return (False, "URL mismatch")

        return (True, None)

    except (ValueError, UnicodeDecodeError, binascii.Error) as e:
        logger.warning(f"Token validation error: {e}")
        return (False, "Token validation failed")
