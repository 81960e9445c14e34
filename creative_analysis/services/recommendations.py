"""
Headline Recommendation Service

Synthesizes validated headline suggestions from two finite sources, chained
lazily in strict order:

1. HEADLINE_CATALOG: fixed domain templates
2. Templated winners: the leading enriched items (in the caller's order);
   digit-free headlines get " in 3 Steps" appended to their first
   alphabetic run, and the recommendation records the source item id

Every candidate is run through the spec validator; only valid, not yet seen
headlines are kept, and accumulation stops as soon as `limit` suggestions
exist. Output is insertion order (catalog first). Producing fewer than
`limit` suggestions is a normal outcome, not an error.
"""

import re
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from creative_analysis.models.schemas import AnnotatedItem, PolicySpec, Recommendation
from creative_analysis.services.validation import validate_headline


# =============================================================================
# Constants
# =============================================================================

HEADLINE_CATALOG: Tuple[str, ...] = (
    "Save £300 on Home Insurance Today",
    "Over 55? Cut Bills in 3 Steps",
    "Walmart Shoppers Are Switching to This",
    "New: Lower Premiums in Minutes",
)

TEMPLATE_SUFFIX = " in 3 Steps"

DEFAULT_LIMIT = 20
DEFAULT_ITEM_POOL = 20

_DIGIT = re.compile(r"\d")
_FIRST_WORD = re.compile(r"[A-Za-z]+")

# (headline, source item id or None for catalog entries)
Candidate = Tuple[str, Optional[str]]


# =============================================================================
# Candidate Generation
# =============================================================================


def template_variant(headline: str) -> str:
    """
    Derive a step-count variant of a winning headline.

    Headlines that already contain a digit are returned unchanged; otherwise
    the suffix is inserted after the first alphabetic run only.

    Example:
        >>> template_variant("Seniors Are Switching Insurers")
        'Seniors in 3 Steps Are Switching Insurers'
    """
    if _DIGIT.search(headline):
        return headline
    return _FIRST_WORD.sub(lambda match: match.group(0) + TEMPLATE_SUFFIX, headline, count=1)


def candidate_headlines(
    enriched: Iterable[AnnotatedItem],
    item_pool: int = DEFAULT_ITEM_POOL,
    catalog: Sequence[str] = HEADLINE_CATALOG,
) -> Iterator[Candidate]:
    """
    Lazily yield candidate headlines: the catalog, then item-derived variants.

    Only the first `item_pool` enriched items are considered; items with a
    blank headline are skipped.
    """
    for headline in catalog:
        yield headline, None
    for item in islice(enriched, max(item_pool, 0)):
        if not item.headline or not item.headline.strip():
            continue
        yield template_variant(item.headline), item.itemId


def _valid_recommendations(
    candidates: Iterable[Candidate],
    spec: PolicySpec,
) -> Iterator[Recommendation]:
    seen: Set[str] = set()
    for headline, source_item_id in candidates:
        if headline in seen:
            continue
        result = validate_headline(headline, spec)
        if not result.ok:
            continue
        seen.add(headline)
        yield Recommendation(headline=headline, issues=result.issues, source_item_id=source_item_id)


# =============================================================================
# Public API
# =============================================================================


def recommend_headlines(
    enriched: Sequence[AnnotatedItem],
    spec: PolicySpec,
    limit: int = DEFAULT_LIMIT,
    item_pool: int = DEFAULT_ITEM_POOL,
    catalog: Sequence[str] = HEADLINE_CATALOG,
) -> List[Recommendation]:
    """
    Build up to `limit` validated headline recommendations.

    Args:
        enriched: Annotated items, already in the caller's preferred order
        spec: Policy spec every recommendation must satisfy
        limit: Maximum number of recommendations
        item_pool: Number of leading items considered for templating
        catalog: Fixed template headlines, tried before any item

    Returns:
        Recommendations in insertion order; catalog entries carry no source
        item id
    """
    candidates = candidate_headlines(enriched, item_pool=item_pool, catalog=catalog)
    return list(islice(_valid_recommendations(candidates, spec), max(limit, 0)))
