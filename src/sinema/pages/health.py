"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from sinema.config import settings
from sinema.dependencies import get_query_cache
from sinema.services.query_cache import QueryCache

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(cache: QueryCache = Depends(get_query_cache)) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Status message, the configured backend and the state of each
        cached collection
    """
    return {
        "status": "ok",
        "backend": settings.api_base_url,
        "queries": cache.statuses(),
    }
