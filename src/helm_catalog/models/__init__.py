"""Data models for Helm Catalog."""

from __future__ import annotations

import enum


class ArtifactKind(enum.Enum):
    README = "readme"
    VALUES = "values"
    DETAIL = "detail"


class ArtifactStatus(enum.Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
