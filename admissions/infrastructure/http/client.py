"""Async JSON-over-HTTP client built on aiohttp."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from admissions import __version__
from admissions.core.errors import ConfigurationError, TransientNetworkError

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."


@dataclass(slots=True, frozen=True)
class HttpResponse:
    status: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class JsonHttpClient:
    """Thin wrapper around a lazily created :class:`aiohttp.ClientSession`.

    Non-2xx responses are returned, not raised, so callers can classify them.
    A missing response (connection error, timeout) is raised as
    :class:`TransientNetworkError`.
    """

    def __init__(
        self,
        base_url: Optional[str],
        bearer_token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.bearer_token = bearer_token
        self.timeout = ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            headers = {
                "User-Agent": f"admissions/{__version__}",
                "Content-Type": "application/json",
            }
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=headers)
            self._owns_session = True
        return self._session

    def _url(self, endpoint: str) -> str:
        if not self.base_url:
            raise ConfigurationError("Service base URL is not configured")
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        if self.bearer_token:
            return {"Authorization": f"Bearer {self.bearer_token}"}
        return {}

    async def request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        url = self._url(endpoint)
        session = await self._get_session()

        try:
            async with session.request(
                method,
                url,
                json=json_data,
                headers=self._headers(),
                timeout=self.timeout,
            ) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = None
                return HttpResponse(status=response.status, payload=payload)
        except asyncio.TimeoutError as exc:
            logger.error("Request timeout: %s %s", method, url)
            raise TransientNetworkError(NETWORK_ERROR_MESSAGE) from exc
        except aiohttp.ClientError as exc:
            logger.error("Request failed: %s %s - %s", method, url, exc)
            raise TransientNetworkError(NETWORK_ERROR_MESSAGE) from exc

    async def get(self, endpoint: str) -> HttpResponse:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> HttpResponse:
        return await self.request("POST", endpoint, json_data=json_data)

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
