"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkhub import __version__
from linkhub.api.core.config import Settings, get_settings
from linkhub.api.core.dependencies import close_twitch_api
from linkhub.api.routers import live_router
from linkhub.api.static import SiteStaticFiles
from linkhub.shared.logging import setup_logging
from linkhub.shared.models import isoformat_utc

logger = logging.getLogger(__name__)

# Track server start time
_start_time: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    global _start_time
    _start_time = time.time()

    settings = get_settings()

    # Startup
    logger.info("Starting link hub server")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Twitch API configured: {settings.twitch_configured}")

    yield

    # Shutdown
    logger.info("Shutting down link hub server")
    try:
        await close_twitch_api()
    except Exception as e:
        logger.exception(f"Error during shutdown: {e}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()

    # Setup logging first
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Link Hub",
        description="Static link hub site with Twitch live status",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    # Public read-only API, any origin may poll it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    # Register routers
    app.include_router(live_router.router)

    # Liveness check: always 200, no external dependency
    @app.get("/health")
    async def health():
        """Liveness check"""
        return {"status": "ok", "timestamp": isoformat_utc(datetime.now(UTC))}

    # Static site last so it only sees paths no route claimed
    if settings.public_dir.is_dir():
        app.mount("/", SiteStaticFiles(directory=settings.public_dir, html=True), name="site")
    else:
        logger.warning(f"Public directory {settings.public_dir} not found, static site disabled")

    logger.info("FastAPI application configured")

    return app
