"""
Core infrastructure package for the Creative Analysis backend.

Provides:
- Configuration management via pydantic-settings
- The policy spec TTL cache
- The async upstream client for the item report / cohort summary
- FastAPI dependency injection utilities

Re-exports key components so other modules can write:

    from creative_analysis.core import get_settings, SettingsDep, SpecCacheDep

Components Re-exported:
    Settings: Pydantic settings class with all configuration parameters
    get_settings: Function returning the cached Settings singleton
    PolicySpecCache: TTL cache for the policy spec snapshot
    UpstreamClient / UpstreamError: collaborator client and its failure type
    get_settings_dependency / get_spec_cache / get_upstream_client: FastAPI dependencies
    SettingsDep / SpecCacheDep / UpstreamDep: Annotated dependency aliases
"""

from creative_analysis.core.config import Settings, get_settings
from creative_analysis.core.spec_cache import PolicySpecCache
from creative_analysis.core.upstream import UpstreamClient, UpstreamError
from creative_analysis.core.dependencies import (
    get_settings_dependency,
    get_spec_cache,
    get_upstream_client,
    SettingsDep,
    SpecCacheDep,
    UpstreamDep,
)


__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Policy spec cache (from spec_cache.py)
    'PolicySpecCache',
    # Upstream collaborators (from upstream.py)
    'UpstreamClient',
    'UpstreamError',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'get_spec_cache',
    'get_upstream_client',
    'SettingsDep',
    'SpecCacheDep',
    'UpstreamDep',
]
