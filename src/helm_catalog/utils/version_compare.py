"""Version comparisons for chart version histories."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version

from helm_catalog.models.chart import VersionHistoryEntry


def parse_version(v: str) -> Version | None:
    """Parse a chart version, tolerating a leading 'v'."""
    for candidate in (v, v[1:] if v.startswith("v") else None):
        if not candidate:
            continue
        try:
            return Version(candidate)
        except InvalidVersion:
            continue
    return None


def version_relation(reference: str, candidate: str) -> str:
    """Describe ``candidate`` relative to ``reference``.

    Returns one of "current", "major", "minor", "patch", "older" or
    "unknown" when either side is not a parseable version.
    """
    if candidate == reference:
        return "current"
    ref = parse_version(reference)
    cand = parse_version(candidate)
    if ref is None or cand is None:
        return "unknown"
    if cand == ref:
        return "current"
    if cand < ref:
        return "older"
    if cand.major > ref.major:
        return "major"
    if cand.minor > ref.minor:
        return "minor"
    return "patch"


def latest_version(history: list[VersionHistoryEntry]) -> str:
    """Return the highest parseable version in ``history`` without reordering it."""
    best: Version | None = None
    best_raw = ""
    for entry in history:
        parsed = parse_version(entry.version)
        if parsed is not None and (best is None or parsed > best):
            best, best_raw = parsed, entry.version
    return best_raw
