"""Deployment request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


def parse_values_overrides(text: str) -> dict[str, Any]:
    """Parse user-supplied YAML overrides into a mapping.

    Blank input means "use the chart defaults" and yields ``{}``.
    """
    if not text or not text.strip():
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid values YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Values overrides must be a YAML mapping")
    return data


@dataclass
class DeployRequest:
    release_name: str
    namespace: str = "default"
    version: str = ""
    cluster_id: str = ""
    values: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "releaseName": self.release_name,
            "namespace": self.namespace,
            "values": self.values,
        }
        if self.version:
            payload["version"] = self.version
        if self.cluster_id:
            payload["clusterId"] = self.cluster_id
        return payload


@dataclass
class DeployResult:
    release_name: str = ""
    namespace: str = ""
    revision: int = 0
    status: str = ""
    chart: str = ""
    app_version: str = ""
    deploy_time: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> DeployResult:
        if not d:
            return cls()
        return cls(
            release_name=d.get("releaseName") or "",
            namespace=d.get("namespace") or "",
            revision=int(d.get("revision") or 0),
            status=d.get("status") or "",
            chart=d.get("chart") or "",
            app_version=d.get("appVersion") or "",
            deploy_time=d.get("deployTime") or "",
        )
