"""Per-view aggregate state for one selected chart."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_catalog.models import ArtifactKind, ArtifactStatus
from helm_catalog.models.chart import VersionHistoryEntry


@dataclass
class ArtifactState:
    kind: ArtifactKind
    status: ArtifactStatus = ArtifactStatus.LOADING
    text: str = ""
    version: str = ""
    error: str = ""
    not_found: bool = False

    @property
    def loading(self) -> bool:
        return self.status == ArtifactStatus.LOADING

    @property
    def failed(self) -> bool:
        return self.status == ArtifactStatus.FAILED

    def start(self, version: str = "") -> None:
        self.status = ArtifactStatus.LOADING
        self.version = version
        self.error = ""
        self.not_found = False

    def succeed(self, text: str = "") -> None:
        self.status = ArtifactStatus.LOADED
        self.text = text
        self.error = ""
        self.not_found = False

    def fail(self, text: str, error: str, not_found: bool = False) -> None:
        self.status = ArtifactStatus.FAILED
        self.text = text
        self.error = error
        self.not_found = not_found


@dataclass
class ChartDetailSnapshot:
    selected_version: str
    readme: ArtifactState = field(default_factory=lambda: ArtifactState(ArtifactKind.README))
    values: ArtifactState = field(default_factory=lambda: ArtifactState(ArtifactKind.VALUES))
    detail: ArtifactState = field(default_factory=lambda: ArtifactState(ArtifactKind.DETAIL))
    version_history: list[VersionHistoryEntry] = field(default_factory=list)
    source_url: str = ""
    error: str = ""

    def artifact(self, kind: ArtifactKind) -> ArtifactState:
        if kind == ArtifactKind.README:
            return self.readme
        if kind == ArtifactKind.VALUES:
            return self.values
        return self.detail

    def app_version_for(self, version: str) -> str:
        for entry in self.version_history:
            if entry.version == version:
                return entry.app_version
        return ""
