"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    device_router,
    health_router,
    live_session_router,
    recommendations_router,
    sessions_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(sessions_router)
api_router.include_router(recommendations_router)
api_router.include_router(live_session_router)
api_router.include_router(device_router)

__all__ = ["api_router"]
