# backend/booking_engine/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from .core.config import Settings, settings
from .database import create_all, create_engine_from_settings, create_session_factory
from .errors import register_error_handlers
from .routes import health, prometheus
from .routes.v1 import bookings as bookings_v1, catalog as catalog_v1

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """
    Build the API application.

    The engine and session factory live on ``app.state`` so each application
    (and each test) owns its database handles. An injected engine is left for
    the caller to dispose.
    """
    config = config or settings
    owns_engine = engine is None
    engine = engine or create_engine_from_settings(config)

    @asynccontextmanager
    async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting booking engine", extra={"environment": config.environment})
        if not config.is_production:
            # Production schemas are managed by migrations
            await create_all(engine)
        yield
        if owns_engine:
            await engine.dispose()
        logger.info("Booking engine stopped")

    app = FastAPI(
        title="Booking Engine",
        description="Booking creation and lifecycle engine for a multi-tenant reservation platform",
        version="1.0.0",
        lifespan=app_lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    register_error_handlers(app)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(bookings_v1.router, prefix="/bookings")
    api_v1.include_router(catalog_v1.router)
    app.include_router(api_v1)

    app.include_router(health.router)
    app.include_router(prometheus.router)
    return app


app = create_app()
