"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, neurocare.api, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from neurocare import __version__
from neurocare.api import api_router
from neurocare.api.deps import get_service_cache
from neurocare.boundary.db import create_tables
from neurocare.configs import get_settings
from neurocare.observability import configure_logging
from neurocare.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging()
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Creating database tables...")
    await create_tables()
    logger.info("Database ready")

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info("Live sessions closed, service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="NeuroCare Therapy API",
        description="Vibration therapy sessions, history and recommendations",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "neurocare.main:app",
        host="0.0.0.0",
        port=8000,
    )
