"""hcat list - List charts across repositories."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from helm_catalog.cli.options import OutputOption, RepoOption
from helm_catalog.cli.runtime import fail, open_catalog, run
from helm_catalog.core.listing_aggregator import ChartCatalog
from helm_catalog.output.formatters import output_charts
from helm_catalog.utils.chart_mapper import CATEGORIES, filter_charts

app = typer.Typer()
console = Console()


async def _load(scope: str) -> ChartCatalog:
    async with open_catalog(scope) as catalog:
        await catalog.refresh_repositories()
        return catalog


@app.callback(invoke_without_command=True)
def list_charts(
    output: str = OutputOption,
    repo: str = RepoOption,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Match name, description or keyword"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help=f"Filter by category: {', '.join(CATEGORIES)}",
    ),
) -> None:
    """List charts from one repository or from all of them."""
    if category and category != "all" and category not in CATEGORIES:
        raise typer.BadParameter(f"unknown category '{category}'", param_hint="--category")

    with console.status("[bold cyan]Fetching charts…"):
        catalog = run(_load(repo))

    if catalog.error:
        raise fail(catalog.error)

    charts = filter_charts(catalog.charts, search=search, category=category)
    if not charts and output == "table":
        console.print("[dim]No charts found.[/dim]")
        if search or category:
            console.print("Tip: Try adjusting your search or filter criteria.")
        return
    title = "Helm Charts" if repo == "all" else f"Helm Charts in {repo}"
    output_charts(charts, output, title=title)
