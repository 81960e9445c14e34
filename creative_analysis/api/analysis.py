"""
FastAPI router module for the creative analysis engine.

Endpoints:
- GET  /analysis-engine: fetch spec, item report and cohort medians for a
  reporting window concurrently, then run the analysis pipeline
- POST /analysis-engine: run the pipeline on caller-supplied items

Error handling:
- Item report failure: the collaborator's status code and body are returned
  unchanged and no analysis is attempted
- Missing cohort medians: derived from the fetched items
- Anything else: HTTP 500 with {"error": message}
"""

import asyncio
import logging
from typing import Any, Awaitable, List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from creative_analysis.api.specs import current_policy_spec
from creative_analysis.core.dependencies import SettingsDep, SpecCacheDep, UpstreamDep
from creative_analysis.core.upstream import UpstreamError
from creative_analysis.models import (
    AnalysisRequest,
    AnalysisResponse,
    ErrorResponse,
    RankKey,
)
from creative_analysis.services.analysis import run_analysis
from creative_analysis.services.report import coerce_rows

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis-engine", tags=["analysis"])


async def gather_or_cancel(*coroutines: Awaitable[Any]) -> List[Any]:
    """
    Run coroutines concurrently and return their results in order.

    If one of them fails, the others are cancelled and awaited before the
    error propagates.
    """
    tasks = [asyncio.ensure_future(coroutine) for coroutine in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


@router.get(
    "",
    response_model=AnalysisResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def analyze_report(
    settings: SettingsDep,
    cache: SpecCacheDep,
    upstream: UpstreamDep,
    date: Optional[str] = Query(None, description="Reporting window, e.g. last_7d, last_14d, last_30d"),
    rank: Optional[RankKey] = Query(None, description="Order items before templating recommendations"),
):
    """
    Analyze the item report for a reporting window.

    The policy spec, item report and cohort medians are gathered
    concurrently; the pipeline runs only once all three are available.

    Args:
        date: Reporting window passed to the collaborators (default from settings)
        rank: Optional item ordering (roas, conversions, ctr, spend)

    Returns:
        AnalysisResponse, or the item report's error response verbatim
    """
    date_range = date or settings.default_date_range

    async def load_spec():
        spec, _ = current_policy_spec(cache, settings)
        return spec

    try:
        spec, items, medians = await gather_or_cancel(
            load_spec(),
            upstream.fetch_items(date_range),
            upstream.fetch_medians(date_range),
        )
    except UpstreamError as e:
        logger.warning(f"Analysis aborted, item report failed with status {e.status_code}")
        return JSONResponse(status_code=e.status_code, content=e.body)
    except Exception as e:
        logger.error(f"Error loading analysis inputs: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})

    try:
        return run_analysis(items, medians, spec, settings=settings, rank=rank)
    except Exception as e:
        logger.error(f"analysis-engine error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.post(
    "",
    response_model=AnalysisResponse,
    responses={500: {"model": ErrorResponse}},
)
async def analyze_items(
    request: AnalysisRequest,
    settings: SettingsDep,
    cache: SpecCacheDep,
):
    """
    Analyze caller-supplied items without contacting the collaborators.

    Items may be normalized items or raw report rows; medians are computed
    from the items when omitted.
    """
    try:
        spec, _ = current_policy_spec(cache, settings)
        return run_analysis(
            coerce_rows(request.items),
            request.medians,
            spec,
            settings=settings,
            rank=request.rank,
        )
    except Exception as e:
        logger.error(f"analysis-engine error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
