"""Builds and sends payment-initiation requests with bounded retry."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Literal, Optional

from admissions.core.config import Settings
from admissions.core.errors import (
    ConfigurationError,
    PaymentReconciliationRequired,
    TransientNetworkError,
    UpstreamServiceError,
)
from admissions.infrastructure.http import HttpResponse, JsonHttpClient

from .classification import GENERIC_MESSAGE, classify_gateway_error, is_retryable
from .models import (
    Branding,
    InitializedPayment,
    PaymentDetails,
    PaymentRequest,
    TransactionReference,
)

logger = logging.getLogger(__name__)

ReferencePolicy = Literal["per_intent", "per_attempt"]

PAYMENTS_ENDPOINT = "/v3/payments"
RECONCILIATION_MESSAGE = (
    "We could not confirm whether your payment was started. "
    "Please contact support with reference {reference} before trying again."
)


def gateway_client_from_settings(settings: Settings) -> JsonHttpClient:
    return JsonHttpClient(
        settings.gateway.base_url,
        bearer_token=settings.gateway.secret_key,
        timeout=settings.gateway.timeout,
    )


class PaymentOrchestrator:
    """Starts a payment at the gateway and returns where to send the payer.

    The orchestrator never performs the redirect itself. Network failures and
    503s are retried ``max_retries`` times, ``retry_delay`` seconds apart; every
    other failure is raised immediately.

    With the ``per_intent`` policy one reference is minted for the payment and
    reused on every retry, so a retried request cannot open a second charge.
    With ``per_attempt`` every attempt gets a fresh reference.
    """

    def __init__(
        self,
        client: JsonHttpClient,
        *,
        secret_key: Optional[str],
        redirect_target: str,
        branding_title: str,
        branding_logo: str,
        currency: str = "NGN",
        max_retries: int = 3,
        retry_delay: float = 5.0,
        reference_prefix: str = "FTI",
        reference_policy: ReferencePolicy = "per_intent",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._secret_key = secret_key
        self.redirect_target = redirect_target
        self.branding_title = branding_title
        self.branding_logo = branding_logo
        self.currency = currency
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.reference_prefix = reference_prefix
        self.reference_policy = reference_policy
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls, settings: Settings, client: Optional[JsonHttpClient] = None
    ) -> "PaymentOrchestrator":
        return cls(
            client or gateway_client_from_settings(settings),
            secret_key=settings.gateway.secret_key,
            redirect_target=settings.confirmation_url,
            branding_title=settings.branding.title,
            branding_logo=settings.branding.logo,
            currency=settings.gateway.currency,
            max_retries=settings.payments.max_retries,
            retry_delay=settings.payments.retry_delay,
            reference_prefix=settings.payments.reference_prefix,
            reference_policy=settings.payments.reference_policy,
        )

    def build_request(self, details: PaymentDetails, reference: TransactionReference) -> PaymentRequest:
        description = "Tuition and Accommodation Payment" if details.accommodation else "Tuition Payment"
        return PaymentRequest(
            reference=reference,
            amount=details.total_amount,
            currency=self.currency,
            customer=details.customer,
            redirect_target=self.redirect_target,
            metadata={
                "accommodation": "Yes" if details.accommodation else "No",
                "address": str(details.address),
            },
            branding=Branding(title=self.branding_title, description=description, logo=self.branding_logo),
        )

    async def initialize_payment(
        self,
        details: PaymentDetails,
        attempt: int = 0,
        reference: Optional[TransactionReference] = None,
        *,
        ambiguous: bool = False,
    ) -> InitializedPayment:
        """``ambiguous`` is set once any attempt of this intent went unanswered."""
        if not self._secret_key:
            raise ConfigurationError("Payment gateway secret key is not configured")

        if reference is None or self.reference_policy == "per_attempt":
            reference = self._mint(previous=reference)
        request = self.build_request(details, reference)
        logger.info("Initializing payment %s (attempt %s)", reference, attempt + 1)

        try:
            response = await self._client.post(PAYMENTS_ENDPOINT, request.to_payload())
        except TransientNetworkError:
            error = classify_gateway_error(None)
            ambiguous = True
        else:
            if response.ok:
                return self._to_initialized(response, reference, attempt)
            error = classify_gateway_error(response.status, response.payload)

        logger.error(
            "Payment initialization failed for %s: %s (status=%s)", reference, error, error.status
        )
        if is_retryable(error) and attempt < self.max_retries:
            logger.info("Retrying payment initialization (attempt %s)", attempt + 1)
            await self._sleep(self.retry_delay)
            return await self.initialize_payment(
                details, attempt + 1, reference, ambiguous=ambiguous
            )

        if ambiguous and self.reference_policy == "per_intent":
            raise PaymentReconciliationRequired(
                RECONCILIATION_MESSAGE.format(reference=reference),
                reference=str(reference),
            ) from error
        raise error

    def _mint(self, previous: Optional[TransactionReference]) -> TransactionReference:
        reference = TransactionReference.mint(self.reference_prefix)
        while previous is not None and reference == previous:
            reference = TransactionReference.mint(self.reference_prefix)
        return reference

    @staticmethod
    def _to_initialized(
        response: HttpResponse, reference: TransactionReference, attempt: int
    ) -> InitializedPayment:
        body: Any = response.payload if isinstance(response.payload, dict) else {}
        data = body.get("data")
        link = data.get("link") if isinstance(data, dict) else None
        if body.get("status") != "success" or not link:
            message = body.get("message")
            logger.error("Unexpected payment initialization response for %s: %s", reference, body)
            raise UpstreamServiceError(message or GENERIC_MESSAGE, status=response.status)
        return InitializedPayment(redirect_url=link, reference=str(reference), attempts=attempt + 1)
