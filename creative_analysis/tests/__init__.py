'''
Creative Analysis Backend Test Suite

Test Modules:
-------------
- test_features.py: Headline feature extraction
  - Totality for None, non-string and empty input
  - Numeral, currency, question and ALL-CAPS rules
  - Vocabulary tables (time, retailer, curiosity, benefit)

- test_validation.py: Headline policy validation
  - Length limit and warn threshold stacking
  - ALL-CAPS rule and letterless exemption

- test_scoring.py: Peer-relative scoring
  - Deltas, driver order, reason clauses and thresholds
  - Per-item invalid metrics do not abort the batch

- test_recommendations.py: Headline recommendations and image briefs
  - Catalog first, cap, de-duplication, lazy candidates
  - Theme catalog and image policy prompts

- test_report.py: Item report normalization, cohort medians, ranking
  and the run_analysis pipeline

- test_spec_cache.py: Policy spec snapshots and TTL cache

- test_upstream.py: Item report / summary client (httpx.MockTransport)

- test_api.py: HTTP endpoints through TestClient

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Test Dependencies:
------------------
- pytest>=8.3.4
- pytest-asyncio>=0.25.0

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
