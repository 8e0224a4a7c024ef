"""Stats endpoints — live counters and the admin summary."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from pedal import __version__
from pedal.config import settings
from pedal.deps import get_registry, get_stores
from pedal.realtime.registry import ConnectionRegistry
from pedal.services.health_service import dependency_status
from pedal.services.stats_service import entity_counts, live_stats
from pedal.store import Stores

router = APIRouter()
admin_router = APIRouter(prefix="/admin")


@router.get("/stats/live")
def get_live_stats(
    stores: Stores = Depends(get_stores),
    registry: ConnectionRegistry = Depends(get_registry),
):
    """Users total/active/online, posts total/today, comments, messages."""
    return live_stats(stores, registry)


@admin_router.get("/stats")
async def get_admin_stats(request: Request, stores: Stores = Depends(get_stores)):
    """Version, dependency status and entity counts for the admin dashboard."""
    deps = await dependency_status(
        request.app.state.db_engine, settings.health_timeout_seconds
    )
    return {
        "version": __version__,
        "time": datetime.now(timezone.utc),
        **deps,
        **entity_counts(stores),
    }
