"""Single health request against the backend service."""

from __future__ import annotations

from typing import Optional

from admissions.core.config import HealthSettings, ServiceSettings
from admissions.core.errors import ConfigurationError, UpstreamServiceError
from admissions.infrastructure.http import JsonHttpClient


class HealthProbe:
    """Performs one ``GET {base}/functions/v1/health`` call.

    Returns ``None`` when the service reports ``{"status": "healthy"}`` and
    raises otherwise.
    """

    def __init__(
        self,
        service: ServiceSettings,
        health: HealthSettings,
        client: Optional[JsonHttpClient] = None,
    ) -> None:
        self._service = service
        self._endpoint = health.endpoint
        self._client = client or JsonHttpClient(
            service.base_url,
            bearer_token=service.public_key,
            timeout=health.timeout,
        )

    async def __call__(self) -> None:
        if not self._service.base_url or not self._service.public_key:
            raise ConfigurationError("Backend service configuration is missing")

        response = await self._client.get(self._endpoint)
        if not response.ok:
            raise UpstreamServiceError(f"API returned status: {response.status}", status=response.status)
        payload = response.payload
        if not isinstance(payload, dict) or payload.get("status") != "healthy":
            raise UpstreamServiceError("API reported unhealthy status", status=response.status)

    async def close(self) -> None:
        await self._client.close()
