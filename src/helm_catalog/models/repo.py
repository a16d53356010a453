"""Repository and cluster models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RepositoryRef:
    name: str
    url: str = ""
    id: str = ""
    username: str = ""
    has_password: bool = False
    insecure_skip_tls_verify: bool = False
    created_at: str = ""
    updated_at: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) or self.has_password

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryRef:
        name = d.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("repository entry has no name")
        return cls(
            name=name,
            url=d.get("url") or "",
            id=str(d.get("id") or ""),
            username=d.get("username") or "",
            has_password=bool(d.get("password")),
            insecure_skip_tls_verify=bool(
                d.get("insecureSkipTLSVerify", d.get("insecureSkipTlsVerify", False))
            ),
            created_at=d.get("createdAt") or "",
            updated_at=d.get("updatedAt") or "",
        )


@dataclass
class ClusterRef:
    name: str
    endpoint: str = ""
    id: str = ""
    description: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ClusterRef:
        name = d.get("clusterName")
        if not isinstance(name, str) or not name:
            raise ValueError("cluster entry has no clusterName")
        return cls(
            name=name,
            endpoint=d.get("clusterEndpoint") or "",
            id=str(d.get("id") or ""),
            description=d.get("description") or "",
            created_at=d.get("createdAt") or "",
        )
