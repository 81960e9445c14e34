"""
Async HTTP client for the item report and cohort summary collaborators.

The analysis engine does not talk to ad platforms itself. It reads two
dashboard endpoints on a configured origin:

- items:   GET {items_path}?date=<range>   -> {"items": [...]}
- summary: GET {summary_path}?date=<range> -> {"medians": {"ctr": .., "cvr": ..}}

A failing item report aborts the analysis: UpstreamError carries the
collaborator's status code and body so the API layer can return them
unchanged. A failing or incomplete summary is not fatal; fetch_medians()
returns None and the caller derives the medians from the items.

Lifecycle:
    One UpstreamClient is created in the FastAPI lifespan, stored on
    app.state and closed at shutdown. Tests pass an httpx.MockTransport.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from creative_analysis.core.config import Settings
from creative_analysis.models.schemas import CohortMedians
from creative_analysis.services.report import coerce_rows

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """
    A collaborator request failed.

    Attributes:
        status_code: HTTP status to surface (502 when the collaborator was
            unreachable)
        body: Decoded response body, returned to the caller verbatim
    """

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__(f"Upstream request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"error": response.text}


class UpstreamClient:
    """Reads the item report and cohort summary for a reporting window."""

    def __init__(
        self,
        base_url: str,
        items_path: str,
        summary_path: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.items_path = items_path
        self.summary_path = summary_path
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "UpstreamClient":
        return cls(
            base_url=settings.upstream_base_url,
            items_path=settings.items_path,
            summary_path=settings.summary_path,
            timeout=settings.upstream_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_items(self, date_range: str) -> List[Any]:
        """
        Fetch the per-item report for a reporting window.

        Raw vendor rows are normalized into item-shaped mappings; rows are
        not validated here so that a malformed row reaches the scorer and is
        annotated rather than failing the whole report.

        Raises:
            UpstreamError: Collaborator unreachable (502) or non-2xx response
        """
        try:
            response = await self._client.get(self.items_path, params={"date": date_range})
        except httpx.HTTPError as e:
            logger.error(f"Item report unreachable: {e}")
            raise UpstreamError(502, {"error": f"Item report unavailable: {e}"}) from e

        body = _decode_body(response)
        if response.is_error:
            logger.warning(f"Item report returned status {response.status_code}")
            raise UpstreamError(response.status_code, body)

        rows = body.get("items") if isinstance(body, dict) else None
        if not isinstance(rows, list):
            return []
        return coerce_rows(rows)

    async def fetch_medians(self, date_range: str) -> Optional[CohortMedians]:
        """
        Fetch cohort medians for a reporting window.

        Returns:
            CohortMedians, or None when the summary is unavailable or has no
            medians (missing individual values default to 0)
        """
        try:
            response = await self._client.get(self.summary_path, params={"date": date_range})
        except httpx.HTTPError as e:
            logger.warning(f"Cohort summary unreachable: {e}")
            return None

        if response.is_error:
            logger.warning(f"Cohort summary returned status {response.status_code}")
            return None

        body = _decode_body(response)
        medians: Optional[Dict[str, Any]] = body.get("medians") if isinstance(body, dict) else None
        if not isinstance(medians, dict):
            logger.warning("Cohort summary has no medians")
            return None

        try:
            return CohortMedians(
                ctr=float(medians.get("ctr") or 0),
                cvr=float(medians.get("cvr") or 0),
            )
        except (TypeError, ValueError) as e:
            logger.warning(f"Cohort summary medians are not numeric: {e}")
            return None
