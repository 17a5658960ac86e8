"""Administrative routes for the chapter cache."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.services import ServiceContainer

from ..dependencies import get_service_container, require_admin_token

router = APIRouter(prefix="/admin/cache", tags=["admin"])
logger = get_logger(__name__)


@router.get("/stats")
async def cache_stats(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
    _: None = Depends(require_admin_token),
) -> dict[str, object]:
    snapshot = container.cache.snapshot()
    if container.verse_store is not None:
        snapshot["persistent_entries"] = await container.verse_store.count()
    snapshot["background_failures"] = container.background.failures
    return snapshot


@router.post("/clear")
async def clear_cache(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
    _: None = Depends(require_admin_token),
) -> dict[str, object]:
    """Drop the in-memory tier; the persistent tier has no delete path."""
    removed = container.cache.clear_memory()
    logger.info("[admin] cleared %d in-memory chapters", removed)
    return {"status": "cleared", "removed": removed}


__all__ = ["router"]
