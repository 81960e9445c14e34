"""
Headline Spec Validation Service

Checks a headline against the headline rules of a PolicySpec. Rules are
evaluated independently and cumulatively, so a single headline can collect
several issues:

1. length > maxChars  -> "Too long ({length}/{maxChars})"
2. length > warnAt    -> "Approaching length limit ({length})"
3. ALL-CAPS and noAllCaps -> "ALL-CAPS not allowed"

Rules 1 and 2 are layered feedback, not alternatives: an over-limit headline
also carries the soft warning when maxChars > warnAt.
"""

from typing import Any, List

from creative_analysis.models.schemas import PolicySpec, ValidationResult
from creative_analysis.services.features import extract_features


ALL_CAPS_ISSUE = "ALL-CAPS not allowed"


def validate_headline(headline: Any, spec: PolicySpec) -> ValidationResult:
    """
    Validate a headline against a policy spec.

    Args:
        headline: Headline text (normalized the same way as the feature extractor)
        spec: Policy spec providing the headline rules

    Returns:
        ValidationResult with ok=True iff no issue was emitted
    """
    features = extract_features(headline)
    rules = spec.headline
    issues: List[str] = []

    if features.length > rules.maxChars:
        issues.append(f"Too long ({features.length}/{rules.maxChars})")
    if features.length > rules.warnAt:
        issues.append(f"Approaching length limit ({features.length})")
    if features.isAllCaps and rules.noAllCaps:
        issues.append(ALL_CAPS_ISSUE)

    return ValidationResult.from_issues(issues)
