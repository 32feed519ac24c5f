"""
FastAPI application setup.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from wanderplan.api import all_routers
from wanderplan.config import get_settings
from wanderplan.core.db import SessionLocal
from wanderplan.core.dependencies import ServiceContainer
from wanderplan.core.error_handlers import setup_error_handlers
from wanderplan.core.logging import configure_logging
from wanderplan.middleware import RateLimitMiddleware, RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Start the service container (identity context, cache, API clients) and
    tear it down on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    container: ServiceContainer = app.state.service_container
    try:
        await container.initialize_services()
        logger.info("Application startup complete")
        yield
    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shutting down application")
        await container.cleanup_services()
        logger.info("Application shutdown complete")


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Service container to use; a default one is created when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    configure_logging(settings.log_level.value, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=None if settings.is_production() else "/docs",
        redoc_url=None if settings.is_production() else "/redoc",
        lifespan=lifespan,
    )
    app.state.service_container = container or ServiceContainer()

    # Last added runs first: request context wraps rate limiting
    app.add_middleware(
        RateLimitMiddleware,
        max_requests_per_minute=settings.security.rate_limit_requests_per_minute,
    )
    app.add_middleware(CORSMiddleware, **settings.get_cors_config())
    app.add_middleware(RequestContextMiddleware)

    error_handler = setup_error_handlers(app)

    for router in all_routers:
        app.include_router(router)

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Database and cache status plus error counters."""
        details = {"database": {"status": "unknown"}, "cache": {"status": "disabled"}}

        try:
            async with SessionLocal() as session:
                await session.execute(text("SELECT 1"))
            details["database"] = {"status": "healthy"}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            details["database"] = {"status": "unhealthy", "error": str(e)}

        cache = app.state.service_container.cache
        if cache is not None:
            details["cache"] = {"status": "healthy" if await cache.ping() else "degraded"}

        overall = "healthy" if details["database"]["status"] == "healthy" else "unhealthy"
        return {
            "status": overall,
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details,
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app
