"""
Item Report Service

Helpers around the per-item performance report consumed by the analysis
engine:

- normalize_report_row: derive CTR/CVR/CPA/ROAS from a raw item-breakdown
  row (vendor field names: item, spent, impressions, clicks, actions,
  conversions_value, title)
- coerce_rows: accept a mix of already-normalized items and raw rows
- median / compute_cohort_medians: peer baseline over a reporting window
- rank_rows: order items by ROAS, conversions, CTR or spend

Metric conventions:
    ctr  = clicks / impressions * 100   (0 when no impressions)
    cvr  = conversions / clicks         (0 when no clicks)
    cpa  = spend / conversions          (None when no conversions)
    roas = revenue / spend              (None unless spend > 0 and revenue > 0)
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np

from creative_analysis.models.enums import RankKey
from creative_analysis.models.schemas import CohortMedians, PerformanceItem

logger = logging.getLogger(__name__)

Row = Union[Mapping[str, Any], PerformanceItem]


# =============================================================================
# Field Access Helpers
# =============================================================================


def _number(value: Any, default: float = 0.0) -> float:
    """Convert a report value to float; None and '' become default."""
    if value is None or value == "":
        return default
    return float(value)


def metric_value(row: Any, name: str) -> Optional[float]:
    """
    Read a numeric metric from a mapping or model, or None when it is
    missing or not numeric.
    """
    if isinstance(row, Mapping):
        value = row.get(name)
    else:
        value = getattr(row, name, None)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# =============================================================================
# Row Normalization
# =============================================================================


def normalize_report_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a raw item-breakdown row into PerformanceItem fields.

    Args:
        row: Raw report row using vendor field names

    Returns:
        Dict with itemId, campaignId, headline, spend, impr, clicks, ctr,
        cpc, cpm, conversions, cvr, cpa, revenue, roas and passthrough
        dimensions (country, site, platform, day)

    Raises:
        ValueError / TypeError: If a numeric field cannot be parsed
    """
    spend = _number(row.get("spent"))
    impressions = _number(row.get("impressions"))
    clicks = _number(row.get("clicks"))
    conversions = _number(row.get("actions"))
    revenue = _number(row.get("conversions_value"))

    return {
        "itemId": str(row.get("item", "")),
        "campaignId": str(row["campaign"]) if row.get("campaign") is not None else None,
        "headline": row.get("title") or "",
        "spend": spend,
        "impr": impressions,
        "clicks": clicks,
        "ctr": clicks / impressions * 100 if impressions > 0 else 0.0,
        "cpc": spend / clicks if clicks > 0 else 0.0,
        "cpm": spend / impressions * 1000 if impressions > 0 else 0.0,
        "conversions": conversions,
        "cvr": conversions / clicks if clicks > 0 else 0.0,
        "cpa": spend / conversions if conversions > 0 else None,
        "revenue": revenue,
        "roas": revenue / spend if spend > 0 and revenue > 0 else None,
        "country": row.get("country") or None,
        "site": row.get("site") or None,
        "platform": row.get("platform") or None,
        "day": row.get("day") or None,
    }


def coerce_rows(rows: Iterable[Any]) -> List[Any]:
    """
    Normalize raw vendor rows, leaving already-normalized items untouched.

    A row is treated as raw when it has an `item` key but no `itemId`. Rows
    that fail normalization are kept as-is so that the scorer can annotate
    them with an error reason instead of dropping them.
    """
    coerced: List[Any] = []
    for row in rows:
        if isinstance(row, Mapping) and "itemId" not in row and "item" in row:
            try:
                row = normalize_report_row(row)
            except (TypeError, ValueError) as e:
                logger.warning(f"Could not normalize report row {row.get('item')!r}: {e}")
        coerced.append(row)
    return coerced


# =============================================================================
# Cohort Medians
# =============================================================================


def median(values: Sequence[float]) -> float:
    """
    Median of a list of values, or 0.0 for an empty list.

    Even-length inputs average the two middle values.
    """
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))


def compute_cohort_medians(rows: Iterable[Row]) -> CohortMedians:
    """
    Compute median CTR and CVR over all items of a reporting window.

    Rows whose metric is missing or not numeric are skipped for that metric.

    Args:
        rows: Performance items or item-shaped mappings

    Returns:
        CohortMedians (0.0 for a metric with no usable values)
    """
    ctrs: List[float] = []
    cvrs: List[float] = []
    for row in rows:
        ctr = metric_value(row, "ctr")
        cvr = metric_value(row, "cvr")
        if ctr is not None:
            ctrs.append(ctr)
        if cvr is not None:
            cvrs.append(cvr)
    return CohortMedians(ctr=median(ctrs), cvr=median(cvrs))


# =============================================================================
# Ranking
# =============================================================================


def _rank_value(row: Any, rank: RankKey) -> float:
    if rank == RankKey.ROAS:
        # Items without ROAS (or with zero ROAS) sort after every positive ROAS
        return metric_value(row, "roas") or -1.0
    return metric_value(row, rank.value) or 0.0


def rank_rows(rows: Sequence[Row], rank: Union[RankKey, str, None]) -> List[Row]:
    """
    Order rows descending by the requested metric.

    The sort is stable, so ties keep their report order. Unknown rank names
    fall back to ROAS; a rank of None keeps the input order.

    Args:
        rows: Items or item-shaped mappings
        rank: RankKey or its string value

    Returns:
        New list in ranked order
    """
    if rank is None:
        return list(rows)
    if not isinstance(rank, RankKey):
        try:
            rank = RankKey(str(rank).lower())
        except ValueError:
            rank = RankKey.ROAS
    return sorted(rows, key=lambda row: _rank_value(row, rank), reverse=True)
