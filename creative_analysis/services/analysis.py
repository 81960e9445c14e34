"""
Analysis Pipeline Service

Runs the creative analysis over one reporting window:

    rank (optional) -> score against cohort medians -> recommend headlines
    -> image briefs -> AnalysisResponse

The pipeline is synchronous and stateless: every object it touches is an
input or freshly built, so concurrent requests can run it without locking.
Fetching the inputs (policy spec, items, medians) is the caller's job.
"""

import logging
from typing import Any, Optional, Sequence, Union

from creative_analysis.core.config import Settings, get_settings
from creative_analysis.models.enums import RankKey
from creative_analysis.models.schemas import (
    AnalysisResponse,
    CohortMedians,
    PolicySpec,
    Recommendations,
    SpecSnapshot,
)
from creative_analysis.services.image_briefs import image_briefs
from creative_analysis.services.recommendations import recommend_headlines
from creative_analysis.services.report import compute_cohort_medians, rank_rows
from creative_analysis.services.scoring import ScoringThresholds, score_items

logger = logging.getLogger(__name__)


def run_analysis(
    items: Sequence[Any],
    medians: Optional[CohortMedians],
    spec: PolicySpec,
    settings: Optional[Settings] = None,
    rank: Union[RankKey, str, None] = None,
) -> AnalysisResponse:
    """
    Analyze a batch of performance items.

    Args:
        items: PerformanceItem instances or item-shaped mappings, in report order
        medians: Cohort medians; computed from the items when None
        spec: Policy spec used for headline validation and image briefs
        settings: Thresholds and limits; defaults to get_settings()
        rank: Optional ordering applied before scoring, which also decides
            which items are templated into recommendations

    Returns:
        AnalysisResponse with annotated items, reasons, recommendations and
        the spec snapshot identity
    """
    settings = settings or get_settings()

    if medians is None:
        medians = compute_cohort_medians(items)
        logger.info(f"Cohort medians derived from {len(items)} items: {medians.model_dump()}")

    ordered = rank_rows(items, rank)
    scored = score_items(ordered, medians, ScoringThresholds.from_settings(settings))

    headlines = recommend_headlines(
        scored.enriched,
        spec,
        limit=settings.recommendation_limit,
        item_pool=settings.recommendation_item_pool,
    )
    images = image_briefs(limit=settings.image_brief_limit, image_policy=spec.image)

    logger.info(
        f"Analysis complete: {len(scored.enriched)} items, "
        f"{len(headlines)} headline recommendations, {len(images)} image briefs"
    )

    return AnalysisResponse(
        items=scored.enriched,
        reasons=scored.reasons,
        recommendations=Recommendations(headlines=headlines, images=images),
        specSnapshot=SpecSnapshot(version=spec.version, fetchedAt=spec.fetchedAt),
    )
