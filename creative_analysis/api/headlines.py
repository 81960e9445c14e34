"""
FastAPI router module for single-headline checks.

Endpoints:
- POST /headlines/validate: features and policy validation for one headline
"""

from fastapi import APIRouter

from creative_analysis.api.specs import current_policy_spec
from creative_analysis.core.dependencies import SettingsDep, SpecCacheDep
from creative_analysis.models import HeadlineCheckRequest, HeadlineCheckResponse, SpecSnapshot
from creative_analysis.services.features import extract_features
from creative_analysis.services.validation import validate_headline

router = APIRouter(prefix="/headlines", tags=["headlines"])


@router.post("/validate", response_model=HeadlineCheckResponse)
async def validate_headline_endpoint(
    request: HeadlineCheckRequest,
    settings: SettingsDep,
    cache: SpecCacheDep,
) -> HeadlineCheckResponse:
    """Check one headline against the current policy spec."""
    spec, _ = current_policy_spec(cache, settings)
    return HeadlineCheckResponse(
        headline=request.headline,
        features=extract_features(request.headline),
        validation=validate_headline(request.headline, spec),
        specSnapshot=SpecSnapshot(version=spec.version, fetchedAt=spec.fetchedAt),
    )
