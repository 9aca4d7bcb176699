"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...data.hub_registry import load_hubs

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/hubs", status_code=status.HTTP_200_OK)
def health_hubs() -> dict:
    """Check that the hub registry can be loaded."""
    try:
        return {"service": "hubs", "healthy": True, "hubs": len(load_hubs())}
    except (OSError, ValueError) as e:
        return {"service": "hubs", "healthy": False, "error": str(e)}
