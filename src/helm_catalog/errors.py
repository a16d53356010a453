"""Exception hierarchy for the chart catalog."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every catalog failure."""


class TransportError(CatalogError):
    """An HTTP request failed.

    ``status_code`` is None when no response was received at all
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class DirectoryUnavailable(CatalogError):
    """The repository directory could not be fetched."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Repository directory unavailable: {reason}")


class RepositoryListingFailed(CatalogError):
    """One repository's chart listing could not be fetched."""

    def __init__(self, repository: str, reason: str) -> None:
        self.repository = repository
        self.reason = reason
        super().__init__(f"Failed to list charts from repository '{repository}': {reason}")


class ArtifactUnavailable(CatalogError):
    """A README, values or detail artifact could not be fetched.

    ``not_found`` distinguishes a missing file from a network or
    server error.
    """

    def __init__(self, kind: str, reason: str, not_found: bool = False) -> None:
        self.kind = kind
        self.reason = reason
        self.not_found = not_found
        super().__init__(f"{kind} unavailable: {reason}")


class RepositoryUnresolved(CatalogError):
    """A chart carries no usable repository identity."""

    def __init__(self, chart_name: str) -> None:
        self.chart_name = chart_name
        super().__init__(f"Repository name not found for chart '{chart_name}'")


class DeployFailed(CatalogError):
    """The backend rejected or failed a deployment request."""

    def __init__(self, chart_name: str, reason: str) -> None:
        self.chart_name = chart_name
        self.reason = reason
        super().__init__(f"Failed to deploy chart '{chart_name}': {reason}")
