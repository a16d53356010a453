"""Per-chart artifact fetches against the catalog backend."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from helm_catalog.core.api_client import ApiClient
from helm_catalog.errors import ArtifactUnavailable, DeployFailed, RepositoryListingFailed, TransportError
from helm_catalog.models import ArtifactKind
from helm_catalog.models.chart import ChartDetail, ChartSummary
from helm_catalog.models.deploy import DeployRequest, DeployResult

logger = logging.getLogger(__name__)


def _unwrap(payload: Any) -> Any:
    """Strip the ``{"data": ...}`` / ``{"result": ...}`` response envelope."""
    if isinstance(payload, dict):
        if "data" in payload:
            return payload["data"]
        if "result" in payload:
            return payload["result"]
    return payload


def _chart_path(repo_name: str, chart_name: str, suffix: str) -> str:
    return f"/charts/{quote(repo_name, safe='')}/{quote(chart_name, safe='')}/{suffix}"


class ChartClient:
    """Fetches listings, README, values and detail records.

    Every artifact fetch fails independently with ArtifactUnavailable.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    async def fetch_chart_list(self, repo_name: str) -> list[ChartSummary]:
        try:
            payload = _unwrap(await self.api.get("/charts", params={"repo": repo_name}))
        except TransportError as e:
            raise RepositoryListingFailed(repo_name, e.message) from e

        if not isinstance(payload, dict) or not isinstance(payload.get("charts") or [], list):
            raise RepositoryListingFailed(repo_name, "malformed chart listing")
        try:
            return [ChartSummary.from_dict(c) for c in payload.get("charts") or []]
        except (AttributeError, TypeError, ValueError) as e:
            raise RepositoryListingFailed(repo_name, f"malformed chart entry: {e}") from e

    async def fetch_readme(self, repo_name: str, chart_name: str, version: str | None = None) -> str:
        payload = await self._fetch_artifact(ArtifactKind.README, repo_name, chart_name, version)
        return self._text_field(ArtifactKind.README, payload, "readmeContent", "readme")

    async def fetch_values(self, repo_name: str, chart_name: str, version: str | None = None) -> str:
        payload = await self._fetch_artifact(ArtifactKind.VALUES, repo_name, chart_name, version)
        return self._text_field(ArtifactKind.VALUES, payload, "valuesContent", "values")

    async def fetch_detail(self, repo_name: str, chart_name: str) -> ChartDetail:
        payload = await self._fetch_artifact(ArtifactKind.DETAIL, repo_name, chart_name, None)
        if not isinstance(payload, dict):
            raise ArtifactUnavailable(ArtifactKind.DETAIL.value, "malformed detail record")
        try:
            return ChartDetail.from_dict(payload)
        except (AttributeError, TypeError, ValueError) as e:
            raise ArtifactUnavailable(ArtifactKind.DETAIL.value, f"malformed detail record: {e}") from e

    async def deploy_chart(self, repo_name: str, chart_name: str, request: DeployRequest) -> DeployResult:
        try:
            payload = _unwrap(await self.api.post(_chart_path(repo_name, chart_name, "deploy"), json=request.to_dict()))
        except TransportError as e:
            raise DeployFailed(chart_name, e.message) from e
        if not isinstance(payload, dict):
            raise DeployFailed(chart_name, "malformed deploy response")
        try:
            return DeployResult.from_dict(payload)
        except (TypeError, ValueError) as e:
            raise DeployFailed(chart_name, f"malformed deploy response: {e}") from e

    async def _fetch_artifact(
        self,
        kind: ArtifactKind,
        repo_name: str,
        chart_name: str,
        version: str | None,
    ) -> Any:
        path = _chart_path(repo_name, chart_name, kind.value)
        params = {"version": version} if version else None
        try:
            return _unwrap(await self.api.get(path, params=params))
        except TransportError as e:
            logger.debug("Fetching %s for %s/%s failed", kind.value, repo_name, chart_name, exc_info=True)
            raise ArtifactUnavailable(kind.value, e.message, not_found=e.not_found) from e

    @staticmethod
    def _text_field(kind: ArtifactKind, payload: Any, *keys: str) -> str:
        if not isinstance(payload, dict):
            raise ArtifactUnavailable(kind.value, f"malformed {kind.value} response")
        for key in keys:
            value = payload.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ArtifactUnavailable(kind.value, f"'{key}' is not text")
            return value
        return ""
