"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Everything a request handler touches (stores, connection
registry, broadcaster) is built here and hung on app.state, so each
test can build a fresh, isolated app. Lifespan only manages the
external resources (Redis, Postgres engine, broadcast remover task).
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pedal import __version__
from pedal.api import admin_router, api_router
from pedal.config import settings
from pedal.realtime.broadcast import Broadcaster
from pedal.realtime.pubsub import EventPublisher
from pedal.realtime.registry import ConnectionRegistry
from pedal.store import Stores

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. Redis and Postgres are optional — failing to reach
    them logs a warning, the app still starts.
    """
    logger.info(
        "pedal.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from pedal.cache import close_redis, init_redis
    from pedal.db.engine import create_engine

    try:
        if await init_redis() is not None:
            logger.info("pedal.redis_connected", url=settings.redis_url)
    except Exception as e:
        logger.warning("pedal.redis_unavailable", error=str(e))

    app.state.db_engine = create_engine()
    await app.state.broadcaster.start()

    yield

    # Shutdown
    logger.info("pedal.shutdown")
    await app.state.broadcaster.stop()
    await close_redis()
    if app.state.db_engine is not None:
        await app.state.db_engine.dispose()
        app.state.db_engine = None


def create_app(stores: Optional[Stores] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="PEDAL Backend",
        description="Social backend — users, posts, follows, messages and a live channel",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Shared state ──────────────────────────────────────────
    app.state.stores = stores or Stores.create(seed=settings.seed_demo_data)
    app.state.registry = ConnectionRegistry()
    app.state.broadcaster = Broadcaster(
        app.state.registry, send_timeout=settings.ws_send_timeout_seconds
    )
    app.state.publisher = EventPublisher(app.state.broadcaster, app.state.stores.config)
    app.state.db_engine = None

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → AccessLog → Security → RateLimit → CORS → handler

    from pedal.middleware.access_log import AccessLogMiddleware
    from pedal.middleware.rate_limit import RateLimitMiddleware
    from pedal.middleware.request_id import RequestIdMiddleware
    from pedal.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware, slow_seconds=settings.slow_request_seconds)
    app.add_middleware(RequestIdMiddleware)

    # Mount API routes
    app.include_router(api_router)
    app.include_router(admin_router)

    # Mount WebSocket route (live channel)
    from pedal.realtime.websocket import router as ws_router
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: pedal.main:app)
app = create_app()
