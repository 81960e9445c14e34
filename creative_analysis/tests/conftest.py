"""
Pytest Configuration and Shared Fixtures for Creative Analysis Tests.

This module provides fixtures and configuration for all backend tests:
- Policy spec factories (default published rules and strict variants)
- Sample performance items and cohort medians
- A controllable clock for policy spec cache expiry
- An httpx.MockTransport-backed upstream client
- A FastAPI TestClient with dependency overrides

Dependencies:
- pytest
- pytest-asyncio
- httpx (MockTransport, TestClient transport)
"""

from typing import Any, Callable, Dict, Generator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from creative_analysis.core.config import Settings
from creative_analysis.core.dependencies import (
    get_settings_dependency,
    get_spec_cache,
    get_upstream_client,
)
from creative_analysis.core.spec_cache import PolicySpecCache
from creative_analysis.core.upstream import UpstreamClient
from creative_analysis.models import CohortMedians, HeadlinePolicy, PerformanceItem, PolicySpec


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - scenario: end-to-end scenarios for the analysis pipeline
    - api: tests exercising the HTTP layer through TestClient
    """
    config.addinivalue_line(
        'markers',
        'scenario: end-to-end scenarios for the analysis pipeline'
    )
    config.addinivalue_line(
        'markers',
        'api: tests exercising the HTTP layer through TestClient'
    )


# ============================================================
# POLICY SPEC FIXTURES
# ============================================================

SpecFactory = Callable[..., PolicySpec]


@pytest.fixture
def make_spec() -> SpecFactory:
    """
    Factory for PolicySpec objects with configurable headline rules.

    Usage:
        def test_x(make_spec):
            spec = make_spec(max_chars=10, warn_at=8)
    """
    def _make(max_chars: int = 60, warn_at: int = 45, no_all_caps: bool = True) -> PolicySpec:
        return PolicySpec(
            version="test-spec",
            fetchedAt="2025-01-15T00:00:00+00:00",
            headline=HeadlinePolicy(maxChars=max_chars, warnAt=warn_at, noAllCaps=no_all_caps),
        )
    return _make


@pytest.fixture
def default_spec(make_spec: SpecFactory) -> PolicySpec:
    """Published rules: maxChars=60, warnAt=45, noAllCaps=True."""
    return make_spec()


# ============================================================
# PERFORMANCE DATA FIXTURES
# ============================================================

@pytest.fixture
def cohort_medians() -> CohortMedians:
    return CohortMedians(ctr=2.0, cvr=0.03)


@pytest.fixture
def sample_items() -> List[PerformanceItem]:
    """
    Three items around the cohort medians (ctr=2.0, cvr=0.03).

    - i1: beats both medians, strong ROAS/CPA, numeral + currency + time word
    - i2: below both medians, no ROAS/CPA, digit-free headline
    - i3: empty headline, exactly at the medians
    """
    return [
        PerformanceItem(itemId="i1", headline="Save $300 on Car Insurance Today",
                        ctr=3.5, cvr=0.04, roas=1.5, cpa=15.0, campaignId="c1"),
        PerformanceItem(itemId="i2", headline="Seniors Are Switching Insurers",
                        ctr=1.0, cvr=0.01),
        PerformanceItem(itemId="i3", headline="", ctr=2.0, cvr=0.03),
    ]


# ============================================================
# CLOCK FIXTURE
# ============================================================

class FakeClock:
    """Monotonic clock stand-in advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# ============================================================
# UPSTREAM FIXTURES
# ============================================================

UPSTREAM_BASE_URL = "http://upstream.test"
ITEMS_PATH = "/api/taboola/items"
SUMMARY_PATH = "/api/taboola/summary"

Handler = Callable[[httpx.Request], httpx.Response]


def make_upstream_handler(
    items_response: Optional[httpx.Response] = None,
    summary_response: Optional[httpx.Response] = None,
    seen: Optional[List[httpx.Request]] = None,
) -> Handler:
    """
    Build a MockTransport handler serving the items and summary endpoints.

    Args:
        items_response: Response for the items path (default: empty item list)
        summary_response: Response for the summary path (default: 404)
        seen: Optional list collecting every request received
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path == ITEMS_PATH:
            return items_response or httpx.Response(200, json={"items": []})
        if request.url.path == SUMMARY_PATH:
            return summary_response or httpx.Response(404, json={"error": "not found"})
        return httpx.Response(404, json={"error": "unknown path"})
    return handler


def make_upstream_client(handler: Handler) -> UpstreamClient:
    return UpstreamClient(
        base_url=UPSTREAM_BASE_URL,
        items_path=ITEMS_PATH,
        summary_path=SUMMARY_PATH,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def api_settings() -> Settings:
    return Settings(upstream_base_url=UPSTREAM_BASE_URL)


@pytest.fixture
def api_client_factory(
    api_settings: Settings,
    fake_clock: FakeClock,
) -> Generator[Callable[[Handler], TestClient], None, None]:
    """
    Factory returning a TestClient wired to a mock upstream.

    The policy spec cache uses the fake clock; overrides are cleared after
    the test.

    Usage:
        def test_x(api_client_factory):
            client = api_client_factory(make_upstream_handler(...))
            response = client.get("/api/analysis-engine")
    """
    from creative_analysis.main import app

    cache = PolicySpecCache(ttl_seconds=api_settings.spec_cache_ttl_seconds, clock=fake_clock)

    def _make(handler: Handler) -> TestClient:
        upstream = make_upstream_client(handler)
        app.dependency_overrides[get_settings_dependency] = lambda: api_settings
        app.dependency_overrides[get_spec_cache] = lambda: cache
        app.dependency_overrides[get_upstream_client] = lambda: upstream
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_handler_factory() -> Callable[..., Handler]:
    return make_upstream_handler


@pytest.fixture
def upstream_client_factory() -> Callable[[Handler], UpstreamClient]:
    return make_upstream_client


@pytest.fixture
def item_payload() -> Callable[..., Dict[str, Any]]:
    """Factory for item-shaped JSON rows with sensible defaults."""
    def _make(**overrides: Any) -> Dict[str, Any]:
        row: Dict[str, Any] = {"itemId": "i1", "headline": "Plain words only", "ctr": 2.0, "cvr": 0.03}
        row.update(overrides)
        return row
    return _make
