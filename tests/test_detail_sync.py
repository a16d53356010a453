"""Tests for the chart detail synchronizer."""

from __future__ import annotations

import asyncio
import dataclasses

import pytest

from helm_catalog.core.detail_sync import ChartDetailSynchronizer, resolve_repository_name
from helm_catalog.errors import ArtifactUnavailable, DeployFailed, RepositoryUnresolved
from helm_catalog.models import ArtifactKind, ArtifactStatus
from helm_catalog.models.chart import DisplayChart, Maintainer


async def settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


class TestResolveRepositoryName:
    def test_explicit_name_wins(self, nginx_chart: DisplayChart) -> None:
        chart = dataclasses.replace(nginx_chart, repository="other/nginx")
        assert resolve_repository_name(chart) == "demo"

    def test_derived_from_composite_identifier(self, nginx_chart: DisplayChart) -> None:
        chart = dataclasses.replace(nginx_chart, repository_name="", repository="bitnami/nginx")
        assert resolve_repository_name(chart) == "bitnami"

    @pytest.mark.parametrize("repository", ["nginx", "", "/nginx"])
    def test_unresolvable(self, nginx_chart: DisplayChart, repository: str) -> None:
        chart = dataclasses.replace(nginx_chart, repository_name="", repository=repository)
        with pytest.raises(RepositoryUnresolved):
            resolve_repository_name(chart)


class TestInitialWave:
    @pytest.mark.asyncio
    async def test_issues_three_fetches_at_nominal_version(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        snap = await sync.load()

        assert sorted(nginx_client.calls) == sorted([
            ("readme", "demo", "nginx", "1.2.0"),
            ("values", "demo", "nginx", "1.2.0"),
            ("detail", "demo", "nginx"),
        ])
        assert snap.readme.text == "# nginx 1.2.0"
        assert snap.values.text == "image:\n  tag: 1.2.0\n"
        assert snap.source_url == "https://github.com/example/nginx-chart"
        assert [v.version for v in snap.version_history] == ["1.2.0", "1.0.0", "1.1.0"]
        assert not sync.loading
        assert not sync.busy

    @pytest.mark.asyncio
    async def test_readme_failure_leaves_siblings_loaded(self, nginx_client, nginx_chart) -> None:
        nginx_client.readmes["1.2.0"] = ArtifactUnavailable("readme", "HTTP 500")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        snap = await sync.load()

        assert snap.readme.status == ArtifactStatus.FAILED
        assert snap.readme.text.startswith("Failed to load README")
        assert not snap.readme.not_found
        assert snap.values.status == ArtifactStatus.LOADED
        assert snap.values.text == "image:\n  tag: 1.2.0\n"
        assert snap.version_history

    @pytest.mark.asyncio
    async def test_placeholder_distinguishes_missing_file(self, nginx_client, nginx_chart) -> None:
        del nginx_client.values["1.2.0"]
        nginx_client.readmes["1.2.0"] = ArtifactUnavailable("readme", "timed out")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        snap = await sync.load()

        assert snap.values.not_found
        assert "has no values.yaml file" in snap.values.text
        assert "not accessible" in snap.readme.text
        assert snap.values.text != snap.readme.text

    @pytest.mark.asyncio
    async def test_empty_readme_gets_default_text(self, nginx_client, nginx_chart) -> None:
        nginx_client.readmes["1.2.0"] = ""
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        snap = await sync.load()

        assert snap.readme.status == ArtifactStatus.LOADED
        assert snap.readme.text == "No README available for this chart."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("detail_fails", [False, True])
    async def test_history_empty_iff_detail_failed(self, nginx_client, nginx_chart, detail_fails) -> None:
        if detail_fails:
            nginx_client.details["nginx"] = ArtifactUnavailable("detail", "HTTP 502")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        snap = await sync.load()

        assert (snap.version_history == []) is detail_fails
        assert snap.detail.failed is detail_fails
        if detail_fails:
            assert snap.source_url == ""
            assert sync.chart.maintainers == []
        else:
            assert sync.chart.maintainers == [Maintainer(name="Jane Doe", email="jane@example.com")]

    @pytest.mark.asyncio
    async def test_maintainer_merge_does_not_touch_listing_record(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        assert nginx_chart.maintainers == [Maintainer(name="listing-maintainer")]
        assert sync.chart is not nginx_chart
        assert sync.chart.maintainers[0].name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_loading_flags_while_in_flight(self, nginx_client, nginx_chart) -> None:
        gate = nginx_client.gate("readme", "1.2.0")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        task = asyncio.create_task(sync.load())
        await settle()

        assert sync.loading
        assert sync.is_loading(ArtifactKind.README)
        assert not sync.is_loading(ArtifactKind.VALUES)
        assert not sync.is_loading(ArtifactKind.DETAIL)

        gate.set()
        await task
        assert not sync.loading
        assert not sync.is_loading(ArtifactKind.README)

    @pytest.mark.asyncio
    async def test_load_runs_once(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()
        calls = len(nginx_client.calls)
        await sync.load()
        assert len(nginx_client.calls) == calls

    @pytest.mark.asyncio
    async def test_same_chart_twice_gives_identical_snapshot(self, nginx_client, nginx_chart) -> None:
        first = ChartDetailSynchronizer(nginx_client, nginx_chart)
        second = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await first.load()
        await second.load()

        assert first.snapshot == second.snapshot
        assert first.chart == second.chart

    @pytest.mark.asyncio
    async def test_unresolved_repository_aborts_without_fetching(self, fake_client) -> None:
        chart = DisplayChart(id="x-0-nginx", name="nginx", version="1.2.0", repository="nginx")
        sync = ChartDetailSynchronizer(fake_client, chart)
        snap = await sync.load()

        assert fake_client.calls == []
        assert "Repository name not found" in snap.error
        assert snap.readme.failed and snap.values.failed and snap.detail.failed
        assert snap.version_history == []
        assert not sync.loading


class TestVersionWave:
    @pytest.mark.asyncio
    async def test_refetches_only_version_scoped_artifacts(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()
        nginx_client.calls.clear()

        assert await sync.select_version("1.1.0") is True

        assert sorted(nginx_client.calls) == sorted([
            ("readme", "demo", "nginx", "1.1.0"),
            ("values", "demo", "nginx", "1.1.0"),
        ])
        assert sync.snapshot.readme.text == "# nginx 1.1.0"
        assert sync.snapshot.readme.version == "1.1.0"
        assert len(sync.snapshot.version_history) == 3
        assert sync.selected_app_version == "1.24.0"

    @pytest.mark.asyncio
    async def test_reselecting_current_version_is_noop(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()
        nginx_client.calls.clear()

        assert await sync.select_version("1.2.0") is False
        assert nginx_client.calls == []

    @pytest.mark.asyncio
    async def test_selection_during_initial_wave_is_deferred(self, nginx_client, nginx_chart) -> None:
        gate = nginx_client.gate("readme", "1.2.0")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        task = asyncio.create_task(sync.load())
        await settle()

        assert await sync.select_version("1.1.0") is False
        assert ("readme", "demo", "nginx", "1.1.0") not in nginx_client.calls

        gate.set()
        await task
        snap = sync.snapshot
        assert snap.selected_version == "1.1.0"
        assert snap.readme.text == "# nginx 1.1.0"
        assert snap.values.text == "image:\n  tag: 1.1.0\n"
        assert not sync.busy

    @pytest.mark.asyncio
    async def test_switch_before_old_readme_returns(self, nginx_client, nginx_chart) -> None:
        nginx_chart = dataclasses.replace(nginx_chart, version="1.0.0")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        gate = nginx_client.gate("readme", "1.2.0")
        first = asyncio.create_task(sync.select_version("1.2.0"))
        await settle()
        assert sync.is_loading(ArtifactKind.README)

        assert await sync.select_version("1.1.0") is True
        gate.set()
        assert await first is True

        assert sync.snapshot.readme.text == "# nginx 1.1.0"
        assert sync.snapshot.values.text == "image:\n  tag: 1.1.0\n"
        assert not sync.busy

    @pytest.mark.asyncio
    @pytest.mark.parametrize("release_order", [("1.1.0", "1.0.0"), ("1.0.0", "1.1.0")])
    async def test_last_selection_wins_regardless_of_completion_order(
        self, nginx_client, nginx_chart, release_order
    ) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        gates = {v: nginx_client.gate("readme", v) for v in ("1.1.0", "1.0.0")}
        first = asyncio.create_task(sync.select_version("1.1.0"))
        await settle()
        second = asyncio.create_task(sync.select_version("1.0.0"))
        await settle()

        for version in release_order:
            gates[version].set()
            await settle()
        await asyncio.gather(first, second)

        assert sync.snapshot.selected_version == "1.0.0"
        assert sync.snapshot.readme.text == "# nginx 1.0.0"
        assert sync.snapshot.readme.version == "1.0.0"
        assert sync.snapshot.values.text == "image:\n  tag: 1.0.0\n"

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self, nginx_client, nginx_chart) -> None:
        nginx_client.readmes["1.1.0"] = ArtifactUnavailable("readme", "HTTP 500")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        gate = nginx_client.gate("readme", "1.1.0")
        first = asyncio.create_task(sync.select_version("1.1.0"))
        await settle()
        await sync.select_version("1.0.0")
        gate.set()
        await first

        assert sync.snapshot.readme.status == ArtifactStatus.LOADED
        assert sync.snapshot.readme.text == "# nginx 1.0.0"

    @pytest.mark.asyncio
    async def test_close_drops_in_flight_results(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        gate = nginx_client.gate("readme", "1.1.0")
        task = asyncio.create_task(sync.select_version("1.1.0"))
        await settle()
        sync.close()
        gate.set()
        await task

        assert sync.snapshot.readme.loading

    @pytest.mark.asyncio
    async def test_unexpected_error_leaves_synchronizer_usable(self, nginx_client, nginx_chart) -> None:
        nginx_client.readmes["1.1.0"] = RuntimeError("boom")
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()

        with pytest.raises(RuntimeError):
            await sync.select_version("1.1.0")
        assert not sync.busy

        assert await sync.select_version("1.0.0") is True
        assert sync.snapshot.readme.text == "# nginx 1.0.0"


class TestDeploy:
    @pytest.mark.asyncio
    async def test_request_uses_selected_version(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        await sync.load()
        await sync.select_version("1.1.0")

        request = sync.deploy_request("prod-cluster", values_text="replicaCount: 2\n")
        assert request.release_name == "my-nginx"
        assert request.namespace == "default"
        assert request.version == "1.1.0"
        assert request.values == {"replicaCount": 2}

        result = await sync.deploy(request)
        assert nginx_client.deployed == [("demo", "nginx", request)]
        assert result.chart == "nginx-1.1.0"

    @pytest.mark.asyncio
    async def test_deploy_refused_while_loading(self, nginx_client, nginx_chart) -> None:
        sync = ChartDetailSynchronizer(nginx_client, nginx_chart)
        request = sync.deploy_request("prod-cluster")

        with pytest.raises(DeployFailed):
            await sync.deploy(request)
        assert nginx_client.deployed == []
