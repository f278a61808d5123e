"""System router for non-versioned application endpoints.

Provides lightweight, side-effect free endpoints for health checks and basic
diagnostics.
"""

from fastapi import APIRouter

from src.core.config import settings


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Application name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint for monitoring.

    Returns:
        dict[str, str]: Health status indicator.
    """
    return {"status": "healthy"}
