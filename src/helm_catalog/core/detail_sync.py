"""Keep a chart's README, values and detail consistent with the selected version."""

from __future__ import annotations

import asyncio
import logging

from helm_catalog.config.settings import settings
from helm_catalog.core.chart_client import ChartClient
from helm_catalog.errors import ArtifactUnavailable, DeployFailed, RepositoryUnresolved
from helm_catalog.models import ArtifactKind
from helm_catalog.models.chart import DisplayChart
from helm_catalog.models.deploy import DeployRequest, DeployResult, parse_values_overrides
from helm_catalog.models.snapshot import ChartDetailSnapshot

logger = logging.getLogger(__name__)

_LABELS = {
    ArtifactKind.README: "README",
    ArtifactKind.VALUES: "values.yaml",
    ArtifactKind.DETAIL: "chart details",
}

_EMPTY_TEXT = {
    ArtifactKind.README: "No README available for this chart.",
    ArtifactKind.VALUES: "No values.yaml available for this chart.",
}


def resolve_repository_name(chart: DisplayChart) -> str:
    """Return the repository a chart's artifacts are fetched from.

    The explicit repository name wins; otherwise the prefix of the
    composite ``repo/chart`` identifier is used.
    """
    if chart.repository_name:
        return chart.repository_name
    prefix, sep, _ = (chart.repository or "").partition("/")
    if sep and prefix:
        return prefix
    raise RepositoryUnresolved(chart.name)


def failure_text(kind: ArtifactKind, not_found: bool) -> str:
    label = _LABELS[kind]
    if not_found:
        return f"Failed to load {label} from the repository: this chart version has no {label} file."
    return (
        f"Failed to load {label} from the repository: "
        "the repository is not accessible or the server returned an error."
    )


def unresolved_text(kind: ArtifactKind) -> str:
    return f"Cannot load {_LABELS[kind]}: the chart's repository could not be determined."


class ChartDetailSynchronizer:
    """State machine behind one open chart detail view.

    ``load()`` runs the initial wave (README, values and detail in
    parallel). ``select_version()`` runs a version wave (README and
    values only). Each wave takes a new token and any settlement whose
    token is no longer current is dropped, so the snapshot always
    reflects the most recently selected version.
    """

    def __init__(self, client: ChartClient, chart: DisplayChart, scope: str = settings.all_repositories):
        self.client = client
        self.chart = chart
        self.scope = scope
        self.snapshot = ChartDetailSnapshot(selected_version=chart.version)
        self._wave = 0
        self._initial_started = False
        self._initial_settled = False
        self._version_pending = False
        self._closed = False

    @property
    def loading(self) -> bool:
        """True until the initial wave has fully settled."""
        return not self._initial_settled

    @property
    def busy(self) -> bool:
        """True while any wave is still pending."""
        return self.loading or self._version_pending

    def is_loading(self, kind: ArtifactKind) -> bool:
        return self.snapshot.artifact(kind).loading

    @property
    def selected_app_version(self) -> str:
        return self.snapshot.app_version_for(self.snapshot.selected_version) or self.chart.app_version

    def close(self) -> None:
        """Drop the results of every in-flight wave."""
        self._closed = True
        self._wave += 1

    async def load(self) -> ChartDetailSnapshot:
        if self._initial_started:
            return self.snapshot
        self._initial_started = True

        token = self._next_wave()
        version = self.chart.version
        snap = self.snapshot
        snap.error = ""
        snap.readme.start(version)
        snap.values.start(version)
        snap.detail.start()

        try:
            repo_name = resolve_repository_name(self.chart)
        except RepositoryUnresolved as e:
            self._abort(e, detail=True)
            self._initial_settled = True
            return snap

        try:
            await asyncio.gather(
                self._settle_text(token, ArtifactKind.README, repo_name, version),
                self._settle_text(token, ArtifactKind.VALUES, repo_name, version),
                self._settle_detail(repo_name),
            )
        finally:
            self._initial_settled = True

        # A version picked while the initial wave was in flight runs now.
        if not self._closed and snap.selected_version != version:
            await self._run_version_wave(snap.selected_version)
        return snap

    async def select_version(self, version: str) -> bool:
        """Select ``version``; returns True if a version wave ran."""
        if version == self.snapshot.selected_version:
            return False
        self.snapshot.selected_version = version
        if not self._initial_settled:
            logger.debug("Initial load pending, deferring version %s of %s", version, self.chart.name)
            return False
        await self._run_version_wave(version)
        return True

    def deploy_request(
        self,
        cluster_id: str,
        release_name: str | None = None,
        namespace: str | None = None,
        values_text: str = "",
    ) -> DeployRequest:
        return DeployRequest(
            release_name=release_name or f"my-{self.chart.name}",
            namespace=namespace or settings.default_namespace,
            version=self.snapshot.selected_version,
            cluster_id=cluster_id,
            values=parse_values_overrides(values_text),
        )

    async def deploy(self, request: DeployRequest) -> DeployResult:
        if self.busy:
            raise DeployFailed(self.chart.name, "chart details are still loading")
        try:
            repo_name = resolve_repository_name(self.chart)
        except RepositoryUnresolved as e:
            raise DeployFailed(self.chart.name, str(e)) from e
        return await self.client.deploy_chart(repo_name, self.chart.name, request)

    def _next_wave(self) -> int:
        self._wave += 1
        return self._wave

    def _is_current(self, token: int) -> bool:
        return not self._closed and token == self._wave

    async def _run_version_wave(self, version: str) -> None:
        token = self._next_wave()
        snap = self.snapshot
        snap.error = ""
        snap.readme.start(version)
        snap.values.start(version)

        try:
            repo_name = resolve_repository_name(self.chart)
        except RepositoryUnresolved as e:
            self._abort(e, detail=False)
            return

        self._version_pending = True
        try:
            await asyncio.gather(
                self._settle_text(token, ArtifactKind.README, repo_name, version),
                self._settle_text(token, ArtifactKind.VALUES, repo_name, version),
            )
        finally:
            # A newer wave owns the flag.
            if token == self._wave:
                self._version_pending = False

    async def _settle_text(self, token: int, kind: ArtifactKind, repo_name: str, version: str) -> None:
        fetch = self.client.fetch_readme if kind == ArtifactKind.README else self.client.fetch_values
        state = self.snapshot.artifact(kind)
        try:
            text = await fetch(repo_name, self.chart.name, version)
        except ArtifactUnavailable as e:
            if not self._is_current(token):
                logger.debug("Dropping stale %s failure for %s %s", kind.value, self.chart.name, version)
                return
            logger.warning("Failed to load %s for %s/%s %s: %s", kind.value, repo_name, self.chart.name, version, e.reason)
            state.fail(failure_text(kind, e.not_found), e.reason, not_found=e.not_found)
            return
        if not self._is_current(token):
            logger.debug("Dropping stale %s for %s %s", kind.value, self.chart.name, version)
            return
        state.succeed(text or _EMPTY_TEXT[kind])

    async def _settle_detail(self, repo_name: str) -> None:
        snap = self.snapshot
        try:
            detail = await self.client.fetch_detail(repo_name, self.chart.name)
        except ArtifactUnavailable as e:
            if self._closed:
                return
            logger.warning("Failed to load detail for %s/%s: %s", repo_name, self.chart.name, e.reason)
            snap.detail.fail(failure_text(ArtifactKind.DETAIL, e.not_found), e.reason, not_found=e.not_found)
            snap.version_history = []
            snap.source_url = ""
            self.chart = self.chart.with_maintainers([])
            return
        if self._closed:
            return
        snap.version_history = list(detail.version_history)
        snap.source_url = detail.source_url
        self.chart = self.chart.with_maintainers(detail.maintainers)
        snap.detail.succeed()

    def _abort(self, error: RepositoryUnresolved, detail: bool) -> None:
        logger.warning("%s", error)
        snap = self.snapshot
        snap.error = str(error)
        for kind in (ArtifactKind.README, ArtifactKind.VALUES):
            snap.artifact(kind).fail(unresolved_text(kind), str(error))
        if detail:
            snap.detail.fail(unresolved_text(ArtifactKind.DETAIL), str(error))
            snap.version_history = []
            snap.source_url = ""
