"""
Peer-Relative Scoring Service

Annotates every performance item with its headline features, its signed
deltas against the cohort medians, and the qualitative drivers its headline
exhibits, then builds a short/detail reason from threshold crossings.

Reason clauses, in order:
    roas >= target_roas  -> "ROAS 1.50 (>= target 1.3)"
    cpa  <= target_cpa   -> "CPA 15.00 (<= £18 target)"
    deltaCtr > 0         -> "CTR +1.50 pts vs peers"
    deltaCvr > 0         -> "CVR +1.0% vs peers"   (delta x 100)

reason.short is the first two clauses joined by " + " (or "Rule evaluation"
when nothing fired); reason.detail is every clause plus a
"; drivers: a, b" suffix when drivers were detected.

Deltas are plain differences (item - median) with no variance
normalization. The scorer annotates, it never filters: every input item
produces exactly one annotated item and one reason, in input order. An item
whose metrics cannot be interpreted is annotated from its headline alone and
receives an "Invalid metrics" reason; the rest of the batch is unaffected.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from creative_analysis.core.config import Settings
from creative_analysis.models.enums import Driver
from creative_analysis.models.schemas import (
    AnnotatedItem,
    CohortMedians,
    Deltas,
    HeadlineFeatures,
    PerformanceItem,
    Reason,
    ReasonText,
)
from creative_analysis.services.features import extract_features

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

CLAUSE_SEPARATOR = " + "
FALLBACK_SHORT_REASON = "Rule evaluation"
SHORT_REASON_CLAUSES = 2


@dataclass(frozen=True)
class ScoringThresholds:
    """
    Business targets used for reason clauses.

    Attributes:
        target_roas: ROAS at or above which the ROAS clause fires
        target_cpa: CPA at or below which the CPA clause fires
    """
    target_roas: float = 1.3
    target_cpa: float = 18.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringThresholds":
        return cls(target_roas=settings.target_roas, target_cpa=settings.target_cpa)


@dataclass
class ScoreResult:
    """Annotated items and their reasons, both in input order."""
    enriched: List[AnnotatedItem] = field(default_factory=list)
    reasons: List[Reason] = field(default_factory=list)


# =============================================================================
# Building Blocks
# =============================================================================


def detect_drivers(features: HeadlineFeatures) -> List[Driver]:
    """Driver tags for a headline, in the fixed reporting order."""
    drivers: List[Driver] = []
    if features.hasNumeral:
        drivers.append(Driver.NUMBER_IN_TITLE)
    if features.hasRetailer:
        drivers.append(Driver.RETAILER_MENTION)
    if features.hasCurrency:
        drivers.append(Driver.PRICE_ANCHOR)
    if features.hasTimeWord:
        drivers.append(Driver.TIME_REFERENCE)
    return drivers


def compute_deltas(item: PerformanceItem, medians: CohortMedians) -> Deltas:
    """Signed CTR/CVR differences between an item and the cohort medians."""
    return Deltas(ctr=item.ctr - medians.ctr, cvr=item.cvr - medians.cvr)


def build_reason_clauses(
    item: PerformanceItem,
    deltas: Deltas,
    thresholds: ScoringThresholds,
) -> List[str]:
    """
    Ordered factual clauses for every threshold the item crosses.

    Zero ROAS/CPA values are treated like missing ones (no spend or no
    conversions) and never produce a clause.
    """
    clauses: List[str] = []
    if item.roas and item.roas >= thresholds.target_roas:
        clauses.append(f"ROAS {item.roas:.2f} (>= target {thresholds.target_roas:g})")
    if item.cpa and item.cpa <= thresholds.target_cpa:
        clauses.append(f"CPA {item.cpa:.2f} (<= £{thresholds.target_cpa:g} target)")
    if deltas.ctr > 0:
        clauses.append(f"CTR +{deltas.ctr:.2f} pts vs peers")
    if deltas.cvr > 0:
        clauses.append(f"CVR +{deltas.cvr * 100:.1f}% vs peers")
    return clauses


def build_reason(clauses: Sequence[str], drivers: Sequence[Driver]) -> ReasonText:
    """Assemble short/detail reason text from clauses and drivers."""
    short = CLAUSE_SEPARATOR.join(clauses[:SHORT_REASON_CLAUSES]) or FALLBACK_SHORT_REASON
    detail = CLAUSE_SEPARATOR.join(clauses)
    if drivers:
        detail += "; drivers: " + ", ".join(driver.value for driver in drivers)
    return ReasonText(short=short, detail=detail)


# =============================================================================
# Item Annotation
# =============================================================================


def annotate_item(
    item: PerformanceItem,
    medians: CohortMedians,
    thresholds: Optional[ScoringThresholds] = None,
) -> Tuple[AnnotatedItem, Reason]:
    """
    Annotate one item and build its reason.

    The input item is left untouched; the annotated copy carries all of its
    fields plus features, deltas and drivers.
    """
    thresholds = thresholds or ScoringThresholds()
    features = extract_features(item.headline)
    deltas = compute_deltas(item, medians)
    drivers = detect_drivers(features)

    annotated = AnnotatedItem.model_validate({
        **item.model_dump(),
        "features": features,
        "deltas": deltas,
        "drivers": drivers,
    })
    reason = build_reason(build_reason_clauses(item, deltas, thresholds), drivers)
    return annotated, Reason(itemId=item.itemId, reason=reason)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "item"
        parts.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "; ".join(parts)


def annotate_invalid_item(raw: Any, message: str) -> Tuple[AnnotatedItem, Reason]:
    """
    Annotate an item whose metrics could not be interpreted.

    Features and drivers are still derived from whatever headline the row
    carries; deltas and metrics are left empty.
    """
    source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    item_id = source.get("itemId")
    if item_id is None:
        item_id = source.get("item", "")
    headline = source.get("headline")
    if headline is None:
        headline = source.get("title")

    features = extract_features(headline)
    drivers = detect_drivers(features)
    annotated = AnnotatedItem(
        itemId=str(item_id),
        headline=headline if isinstance(headline, str) else "",
        features=features,
        deltas=None,
        drivers=drivers,
    )
    reason = ReasonText(short=FALLBACK_SHORT_REASON, detail=f"Invalid metrics: {message}")
    return annotated, Reason(itemId=annotated.itemId, reason=reason)


def score_items(
    items: Sequence[Any],
    medians: CohortMedians,
    thresholds: Optional[ScoringThresholds] = None,
) -> ScoreResult:
    """
    Score a batch of items against the cohort medians.

    Args:
        items: PerformanceItem instances or item-shaped mappings
        medians: Cohort median CTR/CVR for the same reporting window
        thresholds: Business targets for the ROAS/CPA clauses

    Returns:
        ScoreResult with one annotated item and one reason per input item

    Example:
        >>> result = score_items(
        ...     [PerformanceItem(itemId="a", headline="Save $300", ctr=3.0, cvr=0.02)],
        ...     CohortMedians(ctr=2.0, cvr=0.03),
        ... )
        >>> result.enriched[0].deltas.ctr
        1.0
    """
    thresholds = thresholds or ScoringThresholds()
    result = ScoreResult()

    for raw in items:
        try:
            item = raw if isinstance(raw, PerformanceItem) else PerformanceItem.model_validate(raw)
        except ValidationError as e:
            message = _describe_validation_error(e)
            logger.warning(f"Scoring item with invalid metrics: {message}")
            annotated, reason = annotate_invalid_item(raw, message)
        else:
            annotated, reason = annotate_item(item, medians, thresholds)

        result.enriched.append(annotated)
        result.reasons.append(reason)

    logger.debug(f"Scored {len(result.enriched)} items against medians {medians.model_dump()}")
    return result
