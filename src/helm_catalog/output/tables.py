"""Rich table builders for each command."""

from __future__ import annotations

from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from helm_catalog.core.detail_sync import ChartDetailSynchronizer
from helm_catalog.models.chart import DisplayChart
from helm_catalog.models.deploy import DeployResult
from helm_catalog.models.repo import ClusterRef, RepositoryRef
from helm_catalog.output.themes import styled_category, styled_relation, styled_status
from helm_catalog.utils.chart_mapper import install_commands
from helm_catalog.utils.version_compare import latest_version, version_relation


def repository_table(repos: list[RepositoryRef]) -> Table:
    table = Table(title="Chart Repositories", expand=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("URL", style="cyan")
    table.add_column("Auth", no_wrap=True)
    table.add_column("TLS Verify", no_wrap=True)
    table.add_column("Updated", style="dim", no_wrap=True)

    for r in repos:
        table.add_row(
            r.name,
            r.url,
            "[green]yes[/green]" if r.has_credentials else "[dim]no[/dim]",
            "[yellow]skip[/yellow]" if r.insecure_skip_tls_verify else "on",
            r.updated_at[:19],
        )
    return table


def chart_list_table(charts: list[DisplayChart], title: str = "Helm Charts") -> Table:
    table = Table(title=title, expand=True, show_lines=False)
    table.add_column("Repository", style="cyan", no_wrap=True, max_width=20)
    table.add_column("Chart", style="bold white", no_wrap=True)
    table.add_column("Version", style="magenta")
    table.add_column("App Ver", style="cyan")
    table.add_column("Category", no_wrap=True)
    table.add_column("Description", max_width=60)

    for c in charts:
        table.add_row(
            c.repository_name,
            c.name,
            c.version,
            c.app_version or "-",
            styled_category(c.category),
            c.description,
        )
    return table


def chart_info_panel(sync: ChartDetailSynchronizer) -> Panel:
    chart = sync.chart
    snap = sync.snapshot
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Chart", chart.name)
    table.add_row("Repository", chart.repository_name or chart.repository)
    table.add_row("Version", f"{snap.selected_version} (current: {chart.version})")
    table.add_row("App Version", sync.selected_app_version or "-")
    table.add_row("Category", styled_category(chart.category))
    table.add_row("Description", chart.description or "-")
    table.add_row("Created", chart.created_at[:19] or "-")

    if chart.home:
        table.add_row("Home", chart.home)
    table.add_row("Source", snap.source_url or "-")
    if chart.keywords:
        table.add_row("Keywords", ", ".join(chart.keywords))
    table.add_row(
        "Maintainers",
        ", ".join(m.display() for m in chart.maintainers) if chart.maintainers else "-",
    )
    if chart.dependencies:
        deps = ", ".join(f"{d.name}@{d.version}" for d in chart.dependencies)
        table.add_row("Dependencies", deps)
    table.add_row("README", styled_status(snap.readme.status))
    table.add_row("Values", styled_status(snap.values.status))
    table.add_row("Detail", styled_status(snap.detail.status))
    if snap.error:
        table.add_row("Error", f"[red]{snap.error}[/red]")

    return Panel(table, title=f"[bold]Chart: {chart.name}[/bold]", border_style="blue")


def readme_panel(sync: ChartDetailSynchronizer) -> Panel:
    state = sync.snapshot.readme
    body = Markdown(state.text) if not state.failed else state.text
    return Panel(
        body,
        title=f"[bold]README ({state.version})[/bold]",
        border_style="red" if state.failed else "green",
    )


def values_panel(sync: ChartDetailSynchronizer) -> Panel:
    state = sync.snapshot.values
    if state.failed:
        return Panel(state.text, title=f"[bold]values.yaml ({state.version})[/bold]", border_style="red")
    syntax = Syntax(state.text, "yaml", theme="monokai", line_numbers=False)
    return Panel(syntax, title=f"[bold]values.yaml ({state.version})[/bold]", border_style="green")


def history_table(sync: ChartDetailSynchronizer) -> Table:
    history = sync.snapshot.version_history
    nominal = sync.chart.version
    latest = latest_version(history)

    table = Table(title="Version History", expand=True)
    table.add_column("Version", style="bold", no_wrap=True)
    table.add_column("App Ver", style="cyan")
    table.add_column("Relation", no_wrap=True)
    table.add_column("Created", style="dim", no_wrap=True)

    for entry in history:
        label = entry.version
        if entry.version == sync.snapshot.selected_version:
            label = f"[reverse]{label}[/reverse]"
        if entry.version == latest:
            label += " [dim](latest)[/dim]"
        table.add_row(
            label,
            entry.app_version or "-",
            styled_relation(version_relation(nominal, entry.version)),
            entry.created_at[:19],
        )
    return table


def install_table(sync: ChartDetailSynchronizer, repo_url: str = "") -> Table:
    table = Table(title="Install", expand=True, show_header=False)
    table.add_column("Step", style="bold cyan", no_wrap=True)
    table.add_column("Command")
    for title, command in install_commands(sync.chart, sync.snapshot.selected_version, repo_url):
        table.add_row(title, f"[green]{command}[/green]")
    return table


def cluster_table(clusters: list[ClusterRef]) -> Table:
    table = Table(title="Clusters", expand=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("Endpoint", style="cyan")
    table.add_column("Description", max_width=50)
    for c in clusters:
        table.add_row(c.id, c.name, c.endpoint, c.description)
    return table


def deploy_result_panel(result: DeployResult) -> Panel:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Release", result.release_name)
    table.add_row("Namespace", result.namespace)
    table.add_row("Chart", result.chart)
    table.add_row("App Version", result.app_version or "-")
    table.add_row("Revision", str(result.revision))
    table.add_row("Status", result.status)
    table.add_row("Deployed", result.deploy_time[:19] or "-")
    return Panel(table, title=f"[bold]Deployed: {result.release_name}[/bold]", border_style="green")
