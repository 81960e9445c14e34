"""
FastAPI application entry point for the Creative Analysis API.

This module configures logging and CORS, owns the application-scoped
resources (policy spec cache, upstream collaborator client) and registers
the API routers under /api.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creative_analysis import __version__
from creative_analysis.api import api_router
from creative_analysis.core.config import get_settings
from creative_analysis.core.spec_cache import PolicySpecCache
from creative_analysis.core.upstream import UpstreamClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Create the policy spec cache
        - Open the upstream collaborator client

    On shutdown:
        - Close the upstream collaborator client
    """
    settings = get_settings()
    logger.info("Creative Analysis API starting")
    app.state.spec_cache = PolicySpecCache(ttl_seconds=settings.spec_cache_ttl_seconds)
    app.state.upstream = UpstreamClient.from_settings(settings)
    logger.info(f"Upstream collaborators at {settings.upstream_base_url}")

    yield

    logger.info("Creative Analysis API shutting down")
    try:
        await app.state.upstream.aclose()
    except Exception as e:
        logger.error(f"Error closing upstream client: {e}")


app = FastAPI(
    title="Creative Analysis API",
    version=__version__,
    description=(
        "Headline feature extraction, policy validation, peer-relative "
        "scoring and recommendation engine for ad creatives."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Creative Analysis API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "creative_analysis.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
