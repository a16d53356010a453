"""Fan chart listings out across repositories and merge the results."""

from __future__ import annotations

import asyncio
import logging

from helm_catalog.config.settings import settings
from helm_catalog.core.chart_client import ChartClient
from helm_catalog.core.detail_sync import ChartDetailSynchronizer
from helm_catalog.core.repo_directory import RepoDirectory
from helm_catalog.errors import RepositoryListingFailed
from helm_catalog.models.chart import DisplayChart
from helm_catalog.models.repo import RepositoryRef
from helm_catalog.utils.chart_mapper import map_charts

logger = logging.getLogger(__name__)

ALL_REPOSITORIES = settings.all_repositories


class ListingAggregator:
    """Stateless fan-out over one or all repositories."""

    def __init__(self, client: ChartClient):
        self.client = client

    async def fetch_repository(self, repo_name: str) -> list[DisplayChart]:
        """Fetch and map one repository's listing; failures propagate."""
        summaries = await self.client.fetch_chart_list(repo_name)
        return map_charts(summaries, repo_name)

    async def list_charts(self, scope: str, repositories: list[RepositoryRef]) -> list[DisplayChart]:
        """List charts for ``scope``, a repository name or ``"all"``.

        For ``"all"`` every repository is queried concurrently and a
        failing repository contributes nothing. For a single repository
        a failure raises RepositoryListingFailed.
        """
        if scope != ALL_REPOSITORIES:
            return await self.fetch_repository(scope)

        if not repositories:
            return []
        chunks = await asyncio.gather(*(self._fetch_or_empty(r.name) for r in repositories))
        merged = [chart for chunk in chunks for chart in chunk]
        logger.debug("Fetched %d charts from %d repositories", len(merged), len(repositories))
        return merged

    async def _fetch_or_empty(self, repo_name: str) -> list[DisplayChart]:
        try:
            return await self.fetch_repository(repo_name)
        except RepositoryListingFailed as e:
            logger.warning("%s; skipping repository", e)
            return []


class ChartCatalog:
    """Listing state for one browsing session.

    Every refresh takes a new generation number; a listing that settles
    after a newer refresh has started is discarded.
    """

    def __init__(
        self,
        directory: RepoDirectory,
        aggregator: ListingAggregator,
        scope: str = ALL_REPOSITORIES,
    ):
        self.directory = directory
        self.aggregator = aggregator
        self.scope = scope
        self.repositories: list[RepositoryRef] = []
        self.charts: list[DisplayChart] = []
        self.error = ""
        self.loading = False
        self._generation = 0

    async def refresh_repositories(self) -> list[DisplayChart]:
        """Reload the repository set, then re-fan-out."""
        self.repositories = await self.directory.list_repositories()
        return await self.refresh()

    async def set_scope(self, scope: str) -> list[DisplayChart]:
        if scope == self.scope:
            return self.charts
        self.scope = scope
        return await self.refresh()

    async def refresh(self) -> list[DisplayChart]:
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = ""

        try:
            charts = await self.aggregator.list_charts(self.scope, self.repositories)
        except RepositoryListingFailed as e:
            if generation != self._generation:
                logger.debug("Discarding stale listing failure for %s", e.repository)
                return self.charts
            logger.warning("%s", e)
            self.charts = []
            self.error = (
                f"Failed to fetch charts from repository '{e.repository}'. "
                "Please check your connection and try again."
            )
            return self.charts
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug("Discarding stale listing for scope %s", self.scope)
            return self.charts
        self.charts = charts
        return charts

    def repository(self, name: str) -> RepositoryRef | None:
        for repo in self.repositories:
            if repo.name == name:
                return repo
        return None

    def find_chart(self, repo_name: str, chart_name: str) -> DisplayChart | None:
        for chart in self.charts:
            if chart.repository_name == repo_name and chart.name == chart_name:
                return chart
        return None

    def select_chart(self, chart: DisplayChart) -> ChartDetailSynchronizer:
        """Hand a listing entry over to a fresh detail synchronizer."""
        return ChartDetailSynchronizer(self.aggregator.client, chart, scope=self.scope)
