"""hcat deploy <repo>/<chart> - Submit a deployment request."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from helm_catalog.cli.commands.show_cmd import open_chart
from helm_catalog.cli.options import ChartArgument, OutputOption, VersionOption
from helm_catalog.cli.runtime import fail, open_catalog, run, split_chart_ref
from helm_catalog.errors import CatalogError
from helm_catalog.models.deploy import DeployResult
from helm_catalog.output.formatters import output_deploy_result

app = typer.Typer(context_settings={"allow_interspersed_args": True})
console = Console()


async def _deploy(
    repo_name: str,
    chart_name: str,
    version: str | None,
    cluster: str,
    release: str | None,
    namespace: str | None,
    values_text: str,
) -> DeployResult:
    async with open_catalog(repo_name) as catalog:
        sync = await open_chart(catalog, chart_name, version)
        request = sync.deploy_request(cluster, release_name=release, namespace=namespace, values_text=values_text)
        return await sync.deploy(request)


@app.callback(invoke_without_command=True)
def deploy(
    chart: str = ChartArgument,
    cluster: str = typer.Option(..., "--cluster", help="Target cluster ID (see 'hcat clusters')"),
    release: Optional[str] = typer.Option(None, "--release", help="Release name (default: my-<chart>)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Target namespace (default: default)"),
    version: Optional[str] = VersionOption,
    values: Optional[Path] = typer.Option(
        None, "--values", "-f", exists=True, dir_okay=False, help="YAML file with value overrides",
    ),
    output: str = OutputOption,
) -> None:
    """Deploy a chart version to a cluster."""
    repo_name, chart_name = split_chart_ref(chart)
    values_text = values.read_text(encoding="utf-8") if values else ""

    with console.status(f"[bold cyan]Deploying {chart}…"):
        try:
            result = run(_deploy(repo_name, chart_name, version, cluster, release, namespace, values_text))
        except (CatalogError, ValueError) as e:
            raise fail(str(e))

    output_deploy_result(result, output)
