"""
Settings and environment management module for the Creative Analysis backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access
- Policy spec defaults matching the published creative specs snapshot
- Business thresholds for reason generation (target ROAS / CPA)

Environment Variables:
- UPSTREAM_BASE_URL: Origin hosting the item report and summary endpoints
  (default: http://localhost:3000)
- ITEMS_PATH / SUMMARY_PATH: Collaborator paths on the upstream origin
- SPEC_CACHE_TTL_SECONDS: Lifetime of a cached policy spec (default: 6 hours)
- TARGET_ROAS / TARGET_CPA: Reason thresholds (default: 1.3 / 18.0)

Usage:
    from creative_analysis.core.config import get_settings

    settings = get_settings()
    base_url = settings.upstream_base_url
    target_roas = settings.target_roas
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The class inherits from pydantic-settings BaseSettings which provides:
    - Automatic loading from environment variables (case-insensitive)
    - Support for .env file loading
    - Type validation and coercion
    - Default values for every setting, so the service starts without a .env

    Attributes:
        upstream_base_url: Origin of the item report / summary collaborators.
        items_path: Path of the per-item performance report.
        summary_path: Path of the cohort medians summary.
        upstream_timeout_seconds: Timeout applied to collaborator requests.
        default_date_range: Reporting window used when none is requested.
        spec_cache_ttl_seconds: How long a policy spec snapshot stays valid.
        spec_version: Version label stamped on produced spec snapshots.
        headline_max_chars: Hard headline length limit.
        headline_warn_at: Length above which a soft warning is emitted.
        headline_no_all_caps: Whether ALL-CAPS headlines are rejected.
        image_*: Image policy published alongside the headline rules.
        target_roas: ROAS at or above which an item earns a ROAS clause.
        target_cpa: CPA at or below which an item earns a CPA clause.
        recommendation_limit: Maximum headline recommendations returned.
        recommendation_item_pool: Leading items considered for templating.
        image_brief_limit: Maximum image briefs returned.
        cors_origins: Origins allowed by the CORS middleware.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Upstream Collaborators
    # =========================================================================

    upstream_base_url: str = 'http://localhost:3000'
    items_path: str = '/api/taboola/items'
    summary_path: str = '/api/taboola/summary'
    upstream_timeout_seconds: float = Field(default=30.0, gt=0)

    # Reporting window passed through to the collaborators (last_7d, last_14d, last_30d)
    default_date_range: str = 'last_30d'

    # =========================================================================
    # Policy Spec Snapshot
    # =========================================================================

    # 6 hours; specs are slowly-changing published documents
    spec_cache_ttl_seconds: float = Field(default=6 * 60 * 60, ge=0)
    spec_version: str = 'taboola-specs-2025-01'

    headline_max_chars: int = Field(default=60, ge=0)
    headline_warn_at: int = Field(default=45, ge=0)
    headline_no_all_caps: bool = True

    image_aspect: str = '16:9'
    image_recommended: str = '1200x674'
    image_max_size_mb: float = Field(default=5, gt=0)
    image_formats: List[str] = Field(default_factory=lambda: ['jpg', 'jpeg', 'png'])

    # =========================================================================
    # Business Thresholds
    # =========================================================================

    target_roas: float = 1.3
    target_cpa: float = 18.0

    # =========================================================================
    # Recommendation Limits
    # =========================================================================

    recommendation_limit: int = Field(default=20, ge=0)
    recommendation_item_pool: int = Field(default=20, ge=0)
    image_brief_limit: int = Field(default=12, ge=0)

    # =========================================================================
    # HTTP
    # =========================================================================

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            'http://localhost:3000',  # Next.js dev server
            'http://127.0.0.1:3000',
        ]
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Environment variables are only loaded once during the application
    lifecycle.

    Returns:
        Settings: The application settings instance with all configuration values.

    Raises:
        pydantic.ValidationError: If an environment variable has an invalid value.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
