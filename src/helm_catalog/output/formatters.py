"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import yaml
from rich.console import Console

from helm_catalog.core.detail_sync import ChartDetailSynchronizer
from helm_catalog.models.chart import DisplayChart
from helm_catalog.models.deploy import DeployResult
from helm_catalog.models.repo import ClusterRef, RepositoryRef

console = Console()

SECTIONS = ("info", "readme", "values", "history", "install")


def _chart_to_dict(c: DisplayChart) -> dict[str, Any]:
    return {
        "id": c.id,
        "repository": c.repository_name,
        "name": c.name,
        "version": c.version,
        "app_version": c.app_version,
        "category": c.category,
        "description": c.description,
        "keywords": c.keywords,
        "created": c.created_at,
    }


def _repository_to_dict(r: RepositoryRef) -> dict[str, Any]:
    return {
        "name": r.name,
        "url": r.url,
        "has_credentials": r.has_credentials,
        "insecure_skip_tls_verify": r.insecure_skip_tls_verify,
    }


def _snapshot_to_dict(sync: ChartDetailSynchronizer) -> dict[str, Any]:
    snap = sync.snapshot
    return {
        "chart": _chart_to_dict(sync.chart),
        "selected_version": snap.selected_version,
        "app_version": sync.selected_app_version,
        "source_url": snap.source_url,
        "maintainers": [asdict(m) for m in sync.chart.maintainers],
        "version_history": [asdict(v) for v in snap.version_history],
        "readme": {"status": snap.readme.status.value, "version": snap.readme.version, "text": snap.readme.text},
        "values": {"status": snap.values.status.value, "version": snap.values.version, "text": snap.values.text},
        "detail": {"status": snap.detail.status.value, "error": snap.detail.error},
        "error": snap.error,
    }


def _dump(data: Any, fmt: str) -> bool:
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
        return True
    if fmt == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return True
    return False


def output_repositories(repos: list[RepositoryRef], fmt: str) -> None:
    if not _dump([_repository_to_dict(r) for r in repos], fmt):
        from helm_catalog.output.tables import repository_table
        console.print(repository_table(repos))


def output_charts(charts: list[DisplayChart], fmt: str, title: str = "Helm Charts") -> None:
    if not _dump([_chart_to_dict(c) for c in charts], fmt):
        from helm_catalog.output.tables import chart_list_table
        console.print(chart_list_table(charts, title=title))


def output_chart_detail(
    sync: ChartDetailSynchronizer,
    fmt: str,
    section: str = "info",
    repo_url: str = "",
) -> None:
    if _dump(_snapshot_to_dict(sync), fmt):
        return

    from helm_catalog.output import tables

    if section == "readme":
        console.print(tables.readme_panel(sync))
    elif section == "values":
        console.print(tables.values_panel(sync))
    elif section == "history":
        console.print(tables.history_table(sync))
    elif section == "install":
        console.print(tables.install_table(sync, repo_url=repo_url))
    else:
        console.print(tables.chart_info_panel(sync))


def output_clusters(clusters: list[ClusterRef], fmt: str) -> None:
    if not _dump([asdict(c) for c in clusters], fmt):
        from helm_catalog.output.tables import cluster_table
        console.print(cluster_table(clusters))


def output_deploy_result(result: DeployResult, fmt: str) -> None:
    if not _dump(asdict(result), fmt):
        from helm_catalog.output.tables import deploy_result_panel
        console.print(deploy_result_panel(result))
