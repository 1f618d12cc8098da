"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.exceptions import register_exception_handlers
from app.core.health import router as health_router
from app.core.logging import configure_logging, get_logger
from app.core.middleware import RequestIdMiddleware
from app.features.coupons.routes import router as coupons_router
from app.features.dashboard.routes import router as dashboard_router
from app.features.payments.routes import router as payments_router
from app.features.products.routes import router as products_router
from app.features.reviews.routes import router as reviews_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown.

    Args:
        _app: FastAPI application instance (unused, required by lifespan protocol).

    Yields:
        None after startup, cleans up on shutdown.
    """
    settings = get_settings()

    # Startup
    configure_logging()
    logger.info(
        "app.startup_started",
        app_name=settings.app_name,
        app_env=settings.app_env,
        debug=settings.debug,
        object_storage_configured=settings.cloudinary_configured,
        payment_gateway_configured=bool(settings.stripe_key),
    )
    if settings.is_production and not (settings.cloudinary_configured and settings.stripe_key):
        logger.warning(
            "app.configuration_incomplete",
            object_storage_configured=settings.cloudinary_configured,
            payment_gateway_configured=bool(settings.stripe_key),
        )

    yield

    # Shutdown
    logger.info("app.shutdown_completed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Storefront catalog, checkout and admin dashboard API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Middleware (order matters - first added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",  # Vite dev server
            "http://127.0.0.1:5173",
        ]
        if settings.is_development
        else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Routers (catalog before reviews; both share /api/v1/product)
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(reviews_router)
    app.include_router(payments_router)
    app.include_router(coupons_router)
    app.include_router(dashboard_router)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
