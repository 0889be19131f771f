"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from shared.config import Settings, get_settings
from .dependencies import ServiceContainer
from .error_handlers import register_exception_handlers
from .routes import health
from modules.auth.routes import router as auth_router
from modules.products.routes import router as products_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. Refuses to start without a signing
    secret: every token would otherwise be signed with an empty key.
    """
    # Startup
    settings: Settings = app.state.settings
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET is not set; refusing to start")
    logger.info(
        "Starting %s on %s:%s (%s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.environment,
    )
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration (defaults to the environment)

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Cake shop catalog API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.container = ServiceContainer(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app, include_stack=settings.is_development)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def welcome() -> str:
        return f"Welcome to the {settings.app_name}"

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(products_router, prefix="/api/v1/products", tags=["products"])

    return app


# Application instance for uvicorn
app = create_app()
