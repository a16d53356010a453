"""Shared CLI options."""

from __future__ import annotations

import typer

from helm_catalog.config.settings import settings

OutputOption = typer.Option(settings.default_output, "--output", "-o", help="Output format: table, json, yaml")
RepoOption = typer.Option(
    settings.all_repositories, "--repo", "-r", help="Repository name (default: all repositories)",
)
VersionOption = typer.Option(None, "--version", help="Chart version (default: the chart's current version)")
ChartArgument = typer.Argument(help="Chart reference as <repository>/<chart>")
