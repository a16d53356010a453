"""Application configuration and defaults."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path


def _default_api_url() -> str:
    return os.environ.get("HELM_CATALOG_API_URL", "") or "http://localhost:8080"


def _default_timeout() -> float:
    raw = os.environ.get("HELM_CATALOG_TIMEOUT", "")
    if not raw:
        return 10.0
    try:
        return float(raw)
    except ValueError:
        return 10.0


def _default_config_dir() -> Path:
    """Return the per-user config directory for the current platform.

    HELM_CATALOG_CONFIG_HOME wins over the platform defaults.
    """
    config_home = os.environ.get("HELM_CATALOG_CONFIG_HOME", "")
    if config_home:
        return Path(config_home)
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm-catalog"
        return Path.home() / "AppData" / "Roaming" / "helm-catalog"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "helm-catalog"
    return Path.home() / ".config" / "helm-catalog"


@dataclass
class Settings:
    api_url: str = field(default_factory=_default_api_url)
    timeout: float = field(default_factory=_default_timeout)
    config_dir: Path = field(default_factory=_default_config_dir)
    default_output: str = "table"
    default_namespace: str = "default"
    all_repositories: str = "all"

    @property
    def token_file(self) -> Path:
        return self.config_dir / "token"


# Global singleton
settings = Settings()
