"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and
probes the optional dependencies (Postgres, Redis). Always 200 — a
down dependency marks the status "degraded", it doesn't fail the
health check itself. Unconfigured dependencies don't degrade anything.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from pedal import __version__
from pedal.config import settings
from pedal.services.health_service import DOWN, dependency_status

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    deps = await dependency_status(
        request.app.state.db_engine, settings.health_timeout_seconds
    )
    status = "degraded" if DOWN in deps.values() else "ok"
    return {
        "status": status,
        "time": datetime.now(timezone.utc),
        "version": __version__,
        **deps,
    }
