"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from splyt.config.settings import Settings, get_settings, override_settings
from splyt.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    set_container,
    shutdown_container,
)
from splyt.domain.exceptions import SplytException
from splyt.infrastructure.monitoring import get_logger, setup_logging
from splyt.presentation.api.middleware import (
    splyt_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from splyt.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from splyt.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)
from splyt.presentation.api.routes import auth, health, notifications, split


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        override_settings(settings)
        set_container(DIContainer(settings))

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(
        level=settings.LOG_LEVEL, json_logs=json_logs, log_file=settings.LOG_FILE
    )
    logger = get_logger(__name__)

    logger.info(f"Creating Splyt application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Splyt application...")
        await initialize_container()
        logger.info("Splyt application started successfully")

        yield

        logger.info("Shutting down Splyt application...")
        await shutdown_container()
        logger.info("Splyt application shutdown complete")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Split bills between wallets and settle in stablecoins",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        GZipMiddleware,
        minimum_size=1000,
        compresslevel=6,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(SplytException, splyt_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routes
    app.include_router(health.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(split.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": settings.APP_NAME,
            "status": "running",
            "version": settings.APP_VERSION,
            "description": "Split Bills, Settle Instantly",
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Database connectivity and split registry mode."""
        container = get_container()
        db_healthy = await container.database.health_check()

        return {
            "status": "healthy" if db_healthy else "degraded",
            "version": settings.APP_VERSION,
            "components": {
                "database": {"status": "healthy" if db_healthy else "unhealthy"},
                "blockchain": {
                    "enabled": settings.BLOCKCHAIN_ENABLED,
                    "registry": type(container.split_registry).__name__,
                },
            },
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Splyt application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn splyt.main:get_app --factory
    """
    return create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "splyt.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
