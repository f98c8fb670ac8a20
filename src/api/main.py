"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    advisory_router,
    auth_router,
    dashboard_router,
    health_router,
    inventory_router,
    movements_router,
    projects_router,
    purchasing_router,
    tools_router,
    users_router,
)
from src.application.services import create_dashboard_session
from src.config import configure_logging, get_logger, get_settings
from src.core.exceptions import LLMError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Creates the dashboard session on startup unless one was already
    attached (tests attach their own), and closes it on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        data_mode=settings.data.mode,
    )

    if getattr(app.state, "session", None) is None:
        app.state.session = create_dashboard_session()

    # Warm up LLM provider (optional)
    if settings.llm.warmup_on_start:
        try:
            from src.infrastructure.llm import get_llm_provider

            health_status = await get_llm_provider().check_health()
            logger.info("llm_provider_ready", healthy=health_status.available)

        except LLMError as e:
            logger.warning("llm_warmup_failed", error=e.code)

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await app.state.session.close()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Obra Inventory Analytics API",
        description="Inventory KPIs, aging, transfer approvals and AI advisory for construction sites",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "Content-Disposition"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(inventory_router)
    app.include_router(tools_router)
    app.include_router(movements_router)
    app.include_router(projects_router)
    app.include_router(purchasing_router)
    app.include_router(advisory_router)
    app.include_router(users_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": settings.app_version}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
