"""
Package initialization file for creative_analysis models.

Re-exports all Pydantic schemas and enumerations from schemas.py and enums.py
so other modules can import them from creative_analysis.models directly.

Usage:
    from creative_analysis.models import (
        PerformanceItem,
        PolicySpec,
        HeadlineFeatures,
        Driver,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from creative_analysis.models.enums import (
    Driver,
    FeatureCategory,
    RankKey,
)

# =============================================================================
# Schemas
# =============================================================================

from creative_analysis.models.schemas import (
    # Policy spec
    HeadlinePolicy,
    ImagePolicy,
    PolicySpec,
    PolicySpecSnapshot,
    SpecSnapshot,
    # Performance data
    PerformanceItem,
    CohortMedians,
    # Headline analysis
    HeadlineFeatures,
    ValidationResult,
    Deltas,
    AnnotatedItem,
    ReasonText,
    Reason,
    # Recommendations
    Recommendation,
    ImageBrief,
    Recommendations,
    # API envelopes
    AnalysisResponse,
    AnalysisRequest,
    HeadlineCheckRequest,
    HeadlineCheckResponse,
    ErrorResponse,
)


__all__ = [
    # Enums
    'Driver',
    'FeatureCategory',
    'RankKey',
    # Policy spec
    'HeadlinePolicy',
    'ImagePolicy',
    'PolicySpec',
    'PolicySpecSnapshot',
    'SpecSnapshot',
    # Performance data
    'PerformanceItem',
    'CohortMedians',
    # Headline analysis
    'HeadlineFeatures',
    'ValidationResult',
    'Deltas',
    'AnnotatedItem',
    'ReasonText',
    'Reason',
    # Recommendations
    'Recommendation',
    'ImageBrief',
    'Recommendations',
    # API envelopes
    'AnalysisResponse',
    'AnalysisRequest',
    'HeadlineCheckRequest',
    'HeadlineCheckResponse',
    'ErrorResponse',
]
