"""Shared fixtures: sample payloads and an in-memory chart client."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from helm_catalog.errors import ArtifactUnavailable
from helm_catalog.models.chart import ChartDetail, ChartSummary, DisplayChart, Maintainer, VersionHistoryEntry
from helm_catalog.models.deploy import DeployRequest, DeployResult


class FakeChartClient:
    """Chart client double with per-call gates.

    Results are looked up by key; an Exception value is raised. A gate
    registered for a key holds that call until the test releases it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.listings: dict[str, Any] = {}
        self.readmes: dict[str, Any] = {}
        self.values: dict[str, Any] = {}
        self.details: dict[str, Any] = {}
        self.deployed: list[tuple[str, str, DeployRequest]] = []
        self._gates: dict[tuple[str, str], asyncio.Event] = {}

    def gate(self, kind: str, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[(kind, key)] = event
        return event

    async def _wait(self, kind: str, key: str) -> None:
        event = self._gates.get((kind, key))
        if event is not None:
            await event.wait()

    @staticmethod
    def _result(table: dict[str, Any], key: str, kind: str) -> Any:
        if key not in table:
            raise ArtifactUnavailable(kind, "HTTP 404", not_found=True)
        value = table[key]
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_chart_list(self, repo_name: str) -> list[ChartSummary]:
        self.calls.append(("list", repo_name))
        await self._wait("list", repo_name)
        value = self.listings.get(repo_name, [])
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_readme(self, repo_name: str, chart_name: str, version: str | None = None) -> str:
        self.calls.append(("readme", repo_name, chart_name, version))
        await self._wait("readme", version or "")
        return self._result(self.readmes, version or "", "readme")

    async def fetch_values(self, repo_name: str, chart_name: str, version: str | None = None) -> str:
        self.calls.append(("values", repo_name, chart_name, version))
        await self._wait("values", version or "")
        return self._result(self.values, version or "", "values")

    async def fetch_detail(self, repo_name: str, chart_name: str) -> ChartDetail:
        self.calls.append(("detail", repo_name, chart_name))
        await self._wait("detail", chart_name)
        return self._result(self.details, chart_name, "detail")

    async def deploy_chart(self, repo_name: str, chart_name: str, request: DeployRequest) -> DeployResult:
        self.deployed.append((repo_name, chart_name, request))
        return DeployResult(
            release_name=request.release_name,
            namespace=request.namespace,
            revision=1,
            status="deployed",
            chart=f"{chart_name}-{request.version}",
        )


@pytest.fixture
def fake_client() -> FakeChartClient:
    return FakeChartClient()


@pytest.fixture
def nginx_chart() -> DisplayChart:
    return DisplayChart(
        id="demo-0-nginx",
        name="nginx",
        version="1.2.0",
        repository="demo/nginx",
        repository_name="demo",
        description="NGINX web server",
        app_version="1.25.0",
        keywords=["nginx", "web"],
        category="networking",
        maintainers=[Maintainer(name="listing-maintainer")],
    )


@pytest.fixture
def nginx_detail() -> ChartDetail:
    return ChartDetail(
        name="nginx",
        version="1.2.0",
        source_url="https://github.com/example/nginx-chart",
        maintainers=[Maintainer(name="Jane Doe", email="jane@example.com")],
        version_history=[
            VersionHistoryEntry(version="1.2.0", app_version="1.25.0", created_at="2024-03-01T00:00:00Z"),
            VersionHistoryEntry(version="1.0.0", app_version="1.23.0", created_at="2023-11-01T00:00:00Z"),
            VersionHistoryEntry(version="1.1.0", app_version="1.24.0", created_at="2024-01-01T00:00:00Z"),
        ],
    )


@pytest.fixture
def nginx_client(fake_client: FakeChartClient, nginx_detail: ChartDetail) -> FakeChartClient:
    """Fake client serving three nginx versions."""
    for version in ("1.0.0", "1.1.0", "1.2.0"):
        fake_client.readmes[version] = f"# nginx {version}"
        fake_client.values[version] = f"image:\n  tag: {version}\n"
    fake_client.details["nginx"] = nginx_detail
    return fake_client


@pytest.fixture
def listing_payload() -> dict:
    """Raw ``GET /charts?repo=demo`` response."""
    return {
        "data": {
            "charts": [
                {
                    "name": "nginx",
                    "version": "1.2.0",
                    "appVersion": "1.25.0",
                    "description": "NGINX web server",
                    "keywords": ["nginx", "web"],
                    "created": "2024-03-01T00:00:00Z",
                    "maintainers": [{"name": "Jane Doe", "email": "jane@example.com"}],
                },
                {
                    "name": "redis",
                    "version": "18.0.1",
                    "keywords": ["Redis", "cache"],
                },
            ],
            "totalCount": 2,
        }
    }


@pytest.fixture
def detail_payload() -> dict:
    """Raw ``GET /charts/demo/nginx/detail`` response."""
    return {
        "data": {
            "name": "nginx",
            "version": "1.2.0",
            "source": "https://github.com/example/nginx-chart",
            "maintainers": [{"name": "Jane Doe", "email": "jane@example.com"}],
            "versionHistory": [
                {"version": "1.1.0", "appVersion": "1.24.0", "created": "2024-01-01T00:00:00Z"},
                {"version": "1.2.0", "appVersion": "1.25.0", "created": "2024-03-01T00:00:00Z"},
            ],
        }
    }
