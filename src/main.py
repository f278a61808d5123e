"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance that receives the
Payoneer consent and MFA challenge redirects.

Run locally:
    python -m src.main

The registered Payoneer redirect URL must point at `/oauth/authorize` on
this server (default port 4000).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src.core.config import settings
from src.presentation.routers import oauth_router, system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Configure logging, announce the callback URL
    - Shutdown: Log shutdown

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    from src.core.container import get_logger

    logger = get_logger()
    logger.info(
        "callback_server_started",
        environment=settings.environment.value,
        redirect_uri=settings.payoneer_redirect_uri,
        api_url=settings.payoneer_api_url,
    )

    yield

    logger.info("callback_server_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Payoneer charge sample: consent, debit, commit and MFA callbacks",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(system_router)
app.include_router(oauth_router)


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
