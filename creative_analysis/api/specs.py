"""
FastAPI router module for the creative policy spec.

Endpoints:
- GET /specs: current policy spec snapshot, served from the TTL cache
"""

import logging
from typing import Tuple

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from creative_analysis.core.config import Settings
from creative_analysis.core.dependencies import SettingsDep, SpecCacheDep
from creative_analysis.core.spec_cache import PolicySpecCache
from creative_analysis.models import ErrorResponse, PolicySpec, PolicySpecSnapshot
from creative_analysis.services.policy import build_policy_spec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["specs"])


def current_policy_spec(cache: PolicySpecCache, settings: Settings) -> Tuple[PolicySpec, bool]:
    """Return (spec, served_from_cache), rebuilding the snapshot when expired."""
    return cache.get_or_refresh(lambda: build_policy_spec(settings))


@router.get(
    "/specs",
    response_model=PolicySpecSnapshot,
    responses={500: {"model": ErrorResponse}},
)
async def get_specs(cache: SpecCacheDep, settings: SettingsDep):
    """
    Return the creative policy spec snapshot.

    Returns:
        PolicySpecSnapshot with headline/image rules, version, fetchedAt and
        `cached` set when the snapshot was served from the cache
    """
    try:
        spec, cached = current_policy_spec(cache, settings)
        return PolicySpecSnapshot(**spec.model_dump(), cached=cached)
    except Exception as e:
        logger.error(f"Error building policy spec: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
