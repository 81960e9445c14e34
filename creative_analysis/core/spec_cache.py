"""
Policy spec cache.

Holds the current PolicySpec together with the monotonic-clock reading it
was stored at. The cache is an explicit object owned by the application
(created in the FastAPI lifespan and injected into handlers), so tests can
construct their own instance with a fake clock and control expiry
deterministically.

A refresh replaces the cached snapshot with a new object; the previous
snapshot is never modified.

Usage:
    cache = PolicySpecCache(ttl_seconds=6 * 60 * 60)
    spec, cached = cache.get_or_refresh(build_policy_spec)
"""

import logging
import time
from typing import Callable, Optional, Tuple

from creative_analysis.models.schemas import PolicySpec

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class PolicySpecCache:
    """
    Time-to-live cache for a single PolicySpec.

    Attributes:
        ttl_seconds: Lifetime of a stored snapshot; 0 disables caching
    """

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[Tuple[PolicySpec, float]] = None

    def peek(self) -> Optional[PolicySpec]:
        """Return the stored snapshot if it is still fresh, else None."""
        if self._entry is None:
            return None
        spec, stored_at = self._entry
        if self._clock() - stored_at < self.ttl_seconds:
            return spec
        return None

    def get_or_refresh(self, factory: Callable[[], PolicySpec]) -> Tuple[PolicySpec, bool]:
        """
        Return the cached snapshot, or build and store a new one.

        Args:
            factory: Called with no arguments to build a fresh snapshot

        Returns:
            Tuple of (spec, served_from_cache)
        """
        spec = self.peek()
        if spec is not None:
            return spec, True

        spec = factory()
        self._entry = (spec, self._clock())
        logger.info(f"Policy spec refreshed: version={spec.version} fetchedAt={spec.fetchedAt}")
        return spec, False

    def invalidate(self) -> None:
        """Drop the stored snapshot; the next read rebuilds it."""
        self._entry = None
