"""HR Dashboard — FastAPI Application Factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hr_dashboard import __version__
from hr_dashboard.common.exceptions import register_exception_handlers
from hr_dashboard.common.rate_limit import limiter
from hr_dashboard.config import Settings, settings as default_settings
from hr_dashboard.dashboard.router import router as dashboard_router
from hr_dashboard.directory.router import router as directory_router
from hr_dashboard.employees.router import router as employees_router
from hr_dashboard.logging_config import configure_logging
from hr_dashboard.proxy.router import router as proxy_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    app_settings: Settings = app.state.settings
    if not app_settings.proxy_base_url:
        logger.warning("API_BASE is not configured; writes and proxy routes will answer 500")
    logger.info("HR API reads from %s", app_settings.reader_base_url)
    yield


def create_app(
    settings: Optional[Settings] = None,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *settings* defaults to the environment-loaded settings; *upstream_transport*
    replaces the network transport used to reach the HR API.
    """
    app_settings = settings or default_settings
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title="HR Dashboard",
        description="Employee directory, daily attendance and availability trends over the HR API",
        version=__version__,
        docs_url="/api/docs" if app_settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if app_settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.upstream_transport = upstream_transport

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/v1/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": __version__,
            "environment": app_settings.ENVIRONMENT,
            "api_base_configured": bool(app_settings.proxy_base_url),
        }

    # Register routers; the roster path must precede the /pages/{view} catch-all
    app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
    app.include_router(employees_router, prefix="/api/v1/pages/all-employees", tags=["employees"])
    app.include_router(directory_router, prefix="/api/v1/pages", tags=["directory"])
    app.include_router(proxy_router, prefix="/api", tags=["proxy"])

    return app


app = create_app()
