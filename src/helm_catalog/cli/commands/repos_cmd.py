"""hcat repos - List known chart repositories."""

from __future__ import annotations

import typer
from rich.console import Console

from helm_catalog.cli.options import OutputOption
from helm_catalog.cli.runtime import open_catalog, run
from helm_catalog.models.repo import RepositoryRef
from helm_catalog.output.formatters import output_repositories

app = typer.Typer()
console = Console()


async def _load() -> list[RepositoryRef]:
    async with open_catalog() as catalog:
        return await catalog.directory.list_repositories()


@app.callback(invoke_without_command=True)
def repos(output: str = OutputOption) -> None:
    """List the chart repositories registered with the backend."""
    repositories = run(_load())
    if not repositories and output == "table":
        console.print("[dim]No repositories found.[/dim]")
        return
    output_repositories(repositories, output)
