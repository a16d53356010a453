"""Chart metadata models."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

_MAINTAINER_KEYS = frozenset({"name", "email", "url"})


def _text(d: dict, key: str) -> str:
    value = d.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _text_list(d: dict, key: str) -> list[str]:
    value = d.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"field '{key}' must be a list of strings")
    return list(value)


@dataclass
class Maintainer:
    name: str = ""
    email: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, d: object) -> Maintainer:
        """Validate a raw maintainer record.

        Only ``{name, email?, url?}`` with string values is accepted;
        anything else raises ValueError.
        """
        if not isinstance(d, dict):
            raise ValueError(f"maintainer entry must be a mapping, got {type(d).__name__}")
        unknown = set(d) - _MAINTAINER_KEYS
        if unknown:
            raise ValueError(f"unknown maintainer fields: {', '.join(sorted(map(str, unknown)))}")
        for key, value in d.items():
            if value is not None and not isinstance(value, str):
                raise ValueError(f"maintainer field '{key}' must be a string")
        name = d.get("name") or ""
        if not name.strip():
            raise ValueError("maintainer entry has no name")
        return cls(name=name, email=d.get("email") or "", url=d.get("url") or "")

    def display(self) -> str:
        text = self.name
        if self.email:
            text += f" <{self.email}>"
        return text


def parse_maintainers(raw: object) -> list[Maintainer]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("maintainers must be a list")
    return [Maintainer.from_dict(m) for m in raw]


@dataclass
class ChartDependency:
    name: str = ""
    version: str = ""
    repository: str = ""
    condition: str = ""
    alias: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ChartDependency:
        return cls(
            name=d.get("name") or "",
            version=d.get("version") or "",
            repository=d.get("repository") or "",
            condition=d.get("condition") or "",
            alias=d.get("alias") or "",
        )


@dataclass
class VersionHistoryEntry:
    version: str = ""
    app_version: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> VersionHistoryEntry:
        return cls(
            version=d.get("version") or "",
            app_version=d.get("appVersion") or "",
            created_at=d.get("created") or d.get("createdAt") or "",
        )


@dataclass
class ChartSummary:
    """One catalog entry as returned by a repository listing."""

    name: str = ""
    version: str = ""
    description: str = ""
    app_version: str = ""
    icon: str = ""
    home: str = ""
    created: str = ""
    sources: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    dependencies: list[ChartDependency] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> ChartSummary:
        if not d:
            return cls()
        return cls(
            name=_text(d, "name"),
            version=_text(d, "version"),
            description=_text(d, "description"),
            app_version=_text(d, "appVersion"),
            icon=_text(d, "icon"),
            home=_text(d, "home"),
            created=_text(d, "created"),
            sources=_text_list(d, "sources"),
            keywords=_text_list(d, "keywords"),
            maintainers=parse_maintainers(d.get("maintainers")),
            dependencies=[ChartDependency.from_dict(dep) for dep in d.get("dependencies") or []],
        )


@dataclass
class ChartDetail:
    """Chart-scoped detail record: version history, maintainers, source."""

    name: str = ""
    version: str = ""
    description: str = ""
    app_version: str = ""
    home: str = ""
    source_url: str = ""
    keywords: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    version_history: list[VersionHistoryEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> ChartDetail:
        if not d:
            return cls()
        return cls(
            name=_text(d, "name"),
            version=_text(d, "version"),
            description=_text(d, "description"),
            app_version=_text(d, "appVersion"),
            home=_text(d, "home"),
            source_url=_text(d, "source"),
            keywords=_text_list(d, "keywords"),
            maintainers=parse_maintainers(d.get("maintainers")),
            version_history=[VersionHistoryEntry.from_dict(v) for v in d.get("versionHistory") or []],
        )


@dataclass
class DisplayChart:
    """A listing entry tagged with its origin repository."""

    id: str
    name: str
    version: str
    repository: str
    repository_name: str = ""
    description: str = ""
    app_version: str = ""
    icon: str = ""
    home: str = ""
    category: str = "others"
    created_at: str = ""
    updated_at: str = ""
    sources: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    dependencies: list[ChartDependency] = field(default_factory=list)

    def with_maintainers(self, maintainers: list[Maintainer]) -> DisplayChart:
        """Return a copy carrying ``maintainers``; self is left untouched."""
        return dataclasses.replace(self, maintainers=list(maintainers))
