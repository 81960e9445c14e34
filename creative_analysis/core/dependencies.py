"""
FastAPI dependency injection module for the Creative Analysis backend.

This module provides reusable FastAPI dependencies for configuration, the
policy spec cache and the upstream collaborator client, so endpoint handlers
never reach for module-level state.

Key Dependencies Provided:
- get_settings_dependency / SettingsDep: the cached Settings singleton
- get_spec_cache / SpecCacheDep: the application's PolicySpecCache
- get_upstream_client / UpstreamDep: the application's UpstreamClient

The cache and client are created in the application lifespan and stored on
app.state. If a request arrives before the lifespan ran (for example a
TestClient used without a context manager), they are created on first use.

Usage Examples:
    @router.get("/specs")
    async def get_specs(cache: SpecCacheDep, settings: SettingsDep):
        spec, cached = cache.get_or_refresh(lambda: build_policy_spec(settings))
        ...

Testing:
    app.dependency_overrides[get_spec_cache] = lambda: PolicySpecCache(60, clock=fake_clock)
    app.dependency_overrides[get_upstream_client] = lambda: UpstreamClient(
        "http://upstream", "/items", "/summary", transport=httpx.MockTransport(handler)
    )
"""

from typing import Annotated

from fastapi import Depends, Request

from creative_analysis.core.config import Settings, get_settings
from creative_analysis.core.spec_cache import PolicySpecCache
from creative_analysis.core.upstream import UpstreamClient


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can swap settings with
    app.dependency_overrides[get_settings_dependency].
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Application-Scoped Resources
# =============================================================================

def get_spec_cache(request: Request, settings: SettingsDep) -> PolicySpecCache:
    """Return the application's policy spec cache."""
    cache = getattr(request.app.state, "spec_cache", None)
    if cache is None:
        cache = PolicySpecCache(ttl_seconds=settings.spec_cache_ttl_seconds)
        request.app.state.spec_cache = cache
    return cache


def get_upstream_client(request: Request, settings: SettingsDep) -> UpstreamClient:
    """Return the application's upstream collaborator client."""
    client = getattr(request.app.state, "upstream", None)
    if client is None:
        client = UpstreamClient.from_settings(settings)
        request.app.state.upstream = client
    return client


SpecCacheDep = Annotated[PolicySpecCache, Depends(get_spec_cache)]
UpstreamDep = Annotated[UpstreamClient, Depends(get_upstream_client)]
