"""
API package initialization.

This package contains FastAPI router modules for the Creative Analysis backend:
- analysis: the analysis engine (GET over the item report, POST over supplied items)
- headlines: single-headline feature extraction and validation
- specs: the cached creative policy spec
"""

from fastapi import APIRouter

from creative_analysis.api.analysis import router as analysis_router
from creative_analysis.api.headlines import router as headlines_router
from creative_analysis.api.specs import router as specs_router

# Main API router, mounted under /api by the application
api_router = APIRouter()

api_router.include_router(analysis_router)  # Has its own /analysis-engine prefix
api_router.include_router(headlines_router)  # Has its own /headlines prefix
api_router.include_router(specs_router)

__all__ = [
    "api_router",
    "analysis_router",
    "headlines_router",
    "specs_router",
]
