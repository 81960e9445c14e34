"""
Creative Analysis Services Module

Business logic for the creative analysis engine. Each service is stateless
and testable without a running server.

Services:
- features: headline feature extraction driven by a vocabulary table
- validation: headline checks against a policy spec
- report: item report normalization, cohort medians, ranking
- scoring: peer-relative deltas, drivers and reasons
- recommendations: validated headline suggestions from catalog + winners
- image_briefs: templated image briefs
- policy: policy spec snapshot construction
- analysis: the end-to-end pipeline used by the API layer

All services are designed to be consumed by the API layer (creative_analysis/api/).
"""

# =============================================================================
# Feature Extraction / Validation
# =============================================================================

from creative_analysis.services.features import (
    HEADLINE_VOCABULARY,
    compile_vocabulary,
    extract_features,
    is_all_caps,
    normalize_headline,
)
from creative_analysis.services.validation import validate_headline

# =============================================================================
# Report Helpers
# =============================================================================

from creative_analysis.services.report import (
    coerce_rows,
    compute_cohort_medians,
    median,
    normalize_report_row,
    rank_rows,
)

# =============================================================================
# Scoring / Recommendations
# =============================================================================

from creative_analysis.services.scoring import (
    ScoreResult,
    ScoringThresholds,
    annotate_item,
    build_reason,
    build_reason_clauses,
    compute_deltas,
    detect_drivers,
    score_items,
)
from creative_analysis.services.recommendations import (
    HEADLINE_CATALOG,
    candidate_headlines,
    recommend_headlines,
    template_variant,
)
from creative_analysis.services.image_briefs import IMAGE_THEMES, image_briefs

# =============================================================================
# Policy / Pipeline
# =============================================================================

from creative_analysis.services.policy import build_policy_spec
from creative_analysis.services.analysis import run_analysis


__all__ = [
    # ----- Feature Extraction / Validation -----
    'HEADLINE_VOCABULARY',
    'compile_vocabulary',
    'extract_features',
    'is_all_caps',
    'normalize_headline',
    'validate_headline',
    # ----- Report Helpers -----
    'coerce_rows',
    'compute_cohort_medians',
    'median',
    'normalize_report_row',
    'rank_rows',
    # ----- Scoring / Recommendations -----
    'ScoreResult',
    'ScoringThresholds',
    'annotate_item',
    'build_reason',
    'build_reason_clauses',
    'compute_deltas',
    'detect_drivers',
    'score_items',
    'HEADLINE_CATALOG',
    'candidate_headlines',
    'recommend_headlines',
    'template_variant',
    'IMAGE_THEMES',
    'image_briefs',
    # ----- Policy / Pipeline -----
    'build_policy_spec',
    'run_analysis',
]
