"""hcat show <repo>/<chart> - Show chart metadata, README, values and history."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from helm_catalog.cli.options import ChartArgument, OutputOption, VersionOption
from helm_catalog.cli.runtime import fail, open_catalog, run, split_chart_ref
from helm_catalog.core.detail_sync import ChartDetailSynchronizer
from helm_catalog.core.listing_aggregator import ChartCatalog
from helm_catalog.errors import CatalogError
from helm_catalog.output.formatters import SECTIONS, output_chart_detail

app = typer.Typer(context_settings={"allow_interspersed_args": True})
console = Console()


async def open_chart(
    catalog: ChartCatalog,
    chart_name: str,
    version: str | None,
) -> ChartDetailSynchronizer:
    """Seed a synchronizer from the catalog's listing and load it."""
    await catalog.refresh_repositories()
    if catalog.error:
        raise CatalogError(catalog.error)
    chart = catalog.find_chart(catalog.scope, chart_name)
    if chart is None:
        raise CatalogError(f"Chart '{chart_name}' not found in repository '{catalog.scope}'.")

    sync = catalog.select_chart(chart)
    await sync.load()
    if version:
        await sync.select_version(version)
    return sync


async def _show(repo_name: str, chart_name: str, version: str | None) -> tuple[ChartDetailSynchronizer, str]:
    async with open_catalog(repo_name) as catalog:
        sync = await open_chart(catalog, chart_name, version)
        repo = catalog.repository(repo_name)
        return sync, repo.url if repo else ""


@app.callback(invoke_without_command=True)
def show(
    chart: str = ChartArgument,
    output: str = OutputOption,
    version: Optional[str] = VersionOption,
    section: str = typer.Option("info", "--section", help=f"What to show: {', '.join(SECTIONS)}"),
) -> None:
    """Show details for a chart at a given version."""
    if section not in SECTIONS:
        raise typer.BadParameter(f"unknown section '{section}'", param_hint="--section")
    repo_name, chart_name = split_chart_ref(chart)

    with console.status(f"[bold cyan]Loading {chart}…"):
        try:
            sync, repo_url = run(_show(repo_name, chart_name, version))
        except CatalogError as e:
            raise fail(str(e))

    history_versions = [v.version for v in sync.snapshot.version_history]
    if version and history_versions and version not in history_versions:
        console.print(f"[yellow]Version {version} is not in the version history of {chart}.[/yellow]")

    output_chart_detail(sync, output, section=section, repo_url=repo_url)
