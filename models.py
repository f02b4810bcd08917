"""Request and response models."""

from typing import Optional

from pydantic import BaseModel


class ResolveRequest(BaseModel):
    """Body of POST /resolve."""

    url: Optional[str] = None


class ResolveResponse(BaseModel):
    """Directly playable audio URL."""

    audio_url: str


class ErrorResponse(BaseModel):
    """JSON error body."""

    error: str
