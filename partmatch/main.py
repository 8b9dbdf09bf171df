"""
FastAPI application entry point.
Mounts routes, error handlers and Prometheus metrics; owns the database lifecycle.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from partmatch.api.v1.router import api_router
from partmatch.cache.redis_client import close_redis
from partmatch.config import get_settings
from partmatch.core.exception_handlers import register_exception_handlers
from partmatch.db.session import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the database handle (pool opens lazily). Shutdown: release pool and Redis."""
    settings = get_settings()
    app.state.db = Database(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )
    logger.info("Database handle created")
    try:
        yield
    finally:
        await app.state.db.dispose()
        await close_redis()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Used and salvaged parts marketplace: listings, search, buyer requests and matches.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
