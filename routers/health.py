"""Liveness endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

LIVENESS_MESSAGE = "DJ Audio API is running"


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness message for uptime checks."""
    return LIVENESS_MESSAGE


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
