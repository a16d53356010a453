"""hcat clusters - List deployment target clusters."""

from __future__ import annotations

import typer
from rich.console import Console

from helm_catalog.cli.options import OutputOption
from helm_catalog.cli.runtime import fail, open_catalog, run
from helm_catalog.errors import DirectoryUnavailable
from helm_catalog.models.repo import ClusterRef
from helm_catalog.output.formatters import output_clusters

app = typer.Typer()
console = Console()


async def _load() -> list[ClusterRef]:
    async with open_catalog() as catalog:
        return await catalog.directory.fetch_clusters()


@app.callback(invoke_without_command=True)
def clusters(output: str = OutputOption) -> None:
    """List the clusters charts can be deployed to."""
    try:
        found = run(_load())
    except DirectoryUnavailable as e:
        raise fail(str(e))
    if not found and output == "table":
        console.print("[dim]No clusters registered.[/dim]")
        return
    output_clusters(found, output)
