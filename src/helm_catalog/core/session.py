"""Process-wide credential state for the catalog backend."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class Session:
    """Bearer token persisted in a file.

    Loaded once at start; cleared when the backend rejects it.
    """

    def __init__(self, token_file: Path, token: str | None = None):
        self.token_file = token_file
        self._token = token

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    def load(self) -> Session:
        try:
            raw = self.token_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            raw = ""
        except OSError:
            logger.debug("Could not read token file %s", self.token_file, exc_info=True)
            raw = ""
        self._token = raw or None
        return self

    def save(self, token: str) -> None:
        self._token = token
        self.token_file.parent.mkdir(parents=True, exist_ok=True)
        self.token_file.write_text(token, encoding="utf-8")
        try:
            self.token_file.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.token_file, exc_info=True)

    def clear(self) -> None:
        self._token = None
        try:
            self.token_file.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove token file %s", self.token_file, exc_info=True)
