"""Async HTTP wrapper around the catalog backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from helm_catalog.config.settings import settings
from helm_catalog.core.session import Session
from helm_catalog.errors import TransportError

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient``.

    Prefixes the configured base URL, attaches the session's bearer
    token to every request and clears the session when the backend
    answers 401.
    """

    def __init__(
        self,
        session: Session,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.timeout,
            headers={"Accept": "application/json"},
            event_hooks={"request": [self._attach_token], "response": [self._check_auth]},
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _check_auth(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            logger.warning("Backend rejected credentials, clearing session")
            self.session.clear()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self._request("POST", path, json=json)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}
        try:
            response = await self._client.request(method, path, params=params or None, json=json)
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {path} returned invalid JSON",
                status_code=response.status_code,
            ) from e
