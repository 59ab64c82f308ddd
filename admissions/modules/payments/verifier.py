"""Post-redirect transaction lookup; advisory only."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from admissions.core.config import Settings
from admissions.core.errors import ConfigurationError, TransientNetworkError
from admissions.infrastructure.http import JsonHttpClient

from .classification import classify_gateway_error
from .models import PaymentResult
from .orchestrator import gateway_client_from_settings

logger = logging.getLogger(__name__)


class PaymentVerifier:
    def __init__(self, client: JsonHttpClient, *, secret_key: Optional[str]) -> None:
        self._client = client
        self._secret_key = secret_key

    @classmethod
    def from_settings(
        cls, settings: Settings, client: Optional[JsonHttpClient] = None
    ) -> "PaymentVerifier":
        return cls(client or gateway_client_from_settings(settings), secret_key=settings.gateway.secret_key)

    async def verify_payment(self, transaction_id: str) -> PaymentResult:
        """One GET, no retry."""
        if not self._secret_key:
            raise ConfigurationError("Payment gateway secret key is not configured")

        endpoint = f"/v3/transactions/{quote(str(transaction_id), safe='')}/verify"
        try:
            response = await self._client.get(endpoint)
        except TransientNetworkError as exc:
            logger.error("Payment verification for %s got no response", transaction_id)
            raise classify_gateway_error(None) from exc

        if not response.ok:
            error = classify_gateway_error(response.status, response.payload)
            logger.error("Payment verification for %s failed: %s", transaction_id, error)
            raise error

        result = PaymentResult.from_gateway(response.payload)
        logger.info("Transaction %s verified as %s", transaction_id, result.status.value)
        return result
