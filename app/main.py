# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the NCFCA membership service, plugs all its parts
# together, and makes sure the database and background workers are ready before the
# first request arrives.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory. The lifespan builds (or reuses) the MembershipContainer,
# starts the queue consumers and shuts everything down on exit. Middleware: request
# logging/correlation, CORS, GZip. Exception handlers are installed by
# ``register_exception_handlers``.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - app.shared.config.settings, app.shared.utils.logging
# - app.modules.membership.container
# - app.api (v1 router, middleware)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (factory mode)
# - API tests (create_application with an injected container)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.api import DEFAULT_HEADERS
from app.api.middleware import RequestLoggingMiddleware, register_exception_handlers
from app.api.v1 import API_TAGS
from app.api.v1.router import api_v1_router
from app.modules.membership.container import MembershipContainer
from app.shared.config.settings import Settings, get_settings
from app.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the container unless one was injected, starts the event consumers
    and releases every resource on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("🚀 NCFCA Membership API starting up...")

    container: Optional[MembershipContainer] = getattr(app.state, "container", None)
    if container is None:
        container = await MembershipContainer.create(settings)
        app.state.container = container
        logger.info("✅ Membership container initialized")

    await container.startup()
    logger.info("✅ NCFCA Membership API startup complete")

    try:
        yield
    finally:
        logger.info("🔄 NCFCA Membership API shutting down...")
        await container.shutdown()
        logger.info("✅ NCFCA Membership API shutdown complete")


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[MembershipContainer] = None,
) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        container: Pre-built container (tests); built in the lifespan otherwise

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings)

    docs_enabled = settings.ENABLE_SWAGGER_UI and not settings.is_production
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    if container is not None:
        app.state.container = container

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    @app.middleware("http")
    async def api_version_headers(request, call_next):
        response: Response = await call_next(request)
        response.headers.update(DEFAULT_HEADERS)
        return response

    # outermost, so every log line of the request carries its id
    app.add_middleware(RequestLoggingMiddleware)

    # =========================================================================
    # ROUTERS AND EXCEPTION HANDLERS
    # =========================================================================

    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)
    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs_url": "/docs" if docs_enabled else None,
            "health_check": f"{settings.API_V1_PREFIX}/health",
            "api_base": settings.API_V1_PREFIX,
        }

    return app


def main():
    """Run the application with uvicorn (development entry point)."""
    settings = get_settings()
    uvicorn.run(
        "app.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
