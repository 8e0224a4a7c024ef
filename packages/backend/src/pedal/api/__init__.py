"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied per route with Depends(get_current_user) where
only *some* routes of a router are protected (posts can be read
anonymously, but not written). The messages router is protected as a
whole at the include_router level.
"""

from fastapi import APIRouter, Depends

from pedal.api.app_config import router as config_router
from pedal.api.auth import router as auth_router
from pedal.api.health import router as health_router
from pedal.api.messages import router as messages_router
from pedal.api.social import router as social_router
from pedal.api.stats import admin_router
from pedal.api.stats import router as stats_router
from pedal.api.users import router as users_router
from pedal.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(stats_router, tags=["stats"])

# Mixed routes: per-endpoint auth
api_router.include_router(users_router, tags=["users"])
api_router.include_router(social_router, tags=["social"])
api_router.include_router(config_router, tags=["config"])

# Protected routes: require a valid JWT
api_router.include_router(messages_router, tags=["messages"], dependencies=_auth)

__all__ = ["api_router", "admin_router"]
