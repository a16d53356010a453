"""Helpers shared by every command: client wiring and error exits."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import typer
from rich.console import Console

from helm_catalog.config.settings import settings
from helm_catalog.core.api_client import ApiClient
from helm_catalog.core.chart_client import ChartClient
from helm_catalog.core.listing_aggregator import ChartCatalog, ListingAggregator
from helm_catalog.core.repo_directory import RepoDirectory
from helm_catalog.core.session import Session

T = TypeVar("T")

err_console = Console(stderr=True)


def load_session() -> Session:
    return Session(settings.token_file).load()


@asynccontextmanager
async def open_catalog(scope: str = settings.all_repositories) -> AsyncIterator[ChartCatalog]:
    async with ApiClient(load_session()) as api:
        yield ChartCatalog(RepoDirectory(api), ListingAggregator(ChartClient(api)), scope=scope)


def run(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def fail(message: str) -> typer.Exit:
    err_console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


def split_chart_ref(ref: str) -> tuple[str, str]:
    """Split ``repo/chart`` into its two parts."""
    repo, sep, chart = ref.partition("/")
    if not sep or not repo or not chart or "/" in chart:
        raise typer.BadParameter(f"expected <repository>/<chart>, got '{ref}'")
    return repo, chart
