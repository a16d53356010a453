"""Known chart repositories and deploy target clusters."""

from __future__ import annotations

import logging

from helm_catalog.core.api_client import ApiClient
from helm_catalog.errors import DirectoryUnavailable, TransportError
from helm_catalog.models.repo import ClusterRef, RepositoryRef

logger = logging.getLogger(__name__)


class RepoDirectory:
    """Read-only view of the backend's repository registry."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def fetch_repositories(self) -> list[RepositoryRef]:
        """Fetch the repository list, raising DirectoryUnavailable on failure."""
        try:
            data = await self.api.get("/helm-repos")
        except TransportError as e:
            raise DirectoryUnavailable(e.message) from e
        if not isinstance(data, list):
            raise DirectoryUnavailable("expected a list of repositories")

        repos: list[RepositoryRef] = []
        for entry in data:
            try:
                repos.append(RepositoryRef.from_dict(entry))
            except (AttributeError, ValueError):
                logger.debug("Skipping malformed repository entry %r", entry, exc_info=True)
        return repos

    async def list_repositories(self) -> list[RepositoryRef]:
        """Return known repositories, or an empty list if the directory is down."""
        try:
            repos = await self.fetch_repositories()
        except DirectoryUnavailable as e:
            logger.warning("%s; continuing with no repositories", e)
            return []
        logger.debug("Fetched %d repositories", len(repos))
        return repos

    async def fetch_clusters(self) -> list[ClusterRef]:
        try:
            data = await self.api.get("/system/clusters")
        except TransportError as e:
            raise DirectoryUnavailable(e.message) from e
        if not isinstance(data, list):
            raise DirectoryUnavailable("expected a list of clusters")

        clusters: list[ClusterRef] = []
        for entry in data:
            try:
                clusters.append(ClusterRef.from_dict(entry))
            except (AttributeError, ValueError):
                logger.debug("Skipping malformed cluster entry %r", entry, exc_info=True)
        return clusters
