"""
Policy Spec Service

Builds the creative policy snapshot (headline and image rules) that
headlines and briefs are checked against. The rules are published
documents rather than an API, so the snapshot is assembled from settings and
stamped with a version label and the time it was produced.
"""

from datetime import datetime, timezone
from typing import Optional

from creative_analysis.core.config import Settings, get_settings
from creative_analysis.models.schemas import HeadlinePolicy, ImagePolicy, PolicySpec


def build_policy_spec(
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> PolicySpec:
    """
    Produce a fresh PolicySpec snapshot.

    Args:
        settings: Source of the rule values; defaults to get_settings()
        now: Snapshot timestamp; defaults to the current UTC time

    Returns:
        A new, frozen PolicySpec
    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)

    return PolicySpec(
        version=settings.spec_version,
        fetchedAt=now.isoformat(),
        headline=HeadlinePolicy(
            maxChars=settings.headline_max_chars,
            warnAt=settings.headline_warn_at,
            noAllCaps=settings.headline_no_all_caps,
        ),
        image=ImagePolicy(
            aspect=settings.image_aspect,
            recommended=settings.image_recommended,
            maxSizeMB=settings.image_max_size_mb,
            formats=list(settings.image_formats),
        ),
    )
