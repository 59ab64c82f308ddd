"""Handles the return leg from the payment page."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from admissions.core.errors import AdmissionsError, TransientNetworkError
from admissions.modules.payments import PaymentResult, PaymentStatus, PaymentVerifier
from admissions.modules.recovery import PendingTransactionContext, SessionRecoveryStore

from .models import JourneyOutcome, JourneyState, PaymentJourney

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "We could not find a pending payment for this session. "
    "If you were charged, please contact support."
)
CANCELLED_MESSAGE = "Payment was cancelled."
UNCONFIRMED_MESSAGE = "We could not confirm your payment. Please contact support if you were charged."
CONFIRMED_MESSAGE = "Payment confirmed. Your application is now being processed."


@dataclass(slots=True)
class ConfirmationService:
    """Consumes the recovery store and confirms the payment with the gateway.

    Query parameters from the redirect are never trusted on their own: the
    stored reference must match the echoed one, and the gateway must report
    a successful transaction for that reference, currency and amount.
    """

    verifier: PaymentVerifier
    recovery_store: SessionRecoveryStore
    currency: str = "NGN"
    max_retries: int = 3
    backoff: float = 2.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    async def confirm(
        self,
        *,
        tx_ref: Optional[str],
        transaction_id: Optional[str],
        status: Optional[str] = None,
    ) -> JourneyOutcome:
        journey = PaymentJourney(JourneyState.REDIRECTED)
        journey.advance(JourneyState.VERIFYING)

        context = await self.recovery_store.consume(expected_reference=tx_ref)
        if context is None or not tx_ref:
            logger.warning("Confirmation without a matching pending transaction (tx_ref=%s)", tx_ref)
            return self._fail(journey, NOT_FOUND_MESSAGE)

        reference = context.transaction_reference
        if status == "cancelled":
            return self._fail(journey, CANCELLED_MESSAGE, reference)
        if not transaction_id:
            return self._fail(journey, UNCONFIRMED_MESSAGE, reference)

        try:
            result = await self._verify_with_backoff(transaction_id)
        except AdmissionsError as exc:
            logger.error("Verification of %s failed: %s", reference, exc)
            return self._fail(journey, exc.message, reference)

        if not self._matches(result, context):
            logger.warning(
                "Transaction %s does not confirm %s (status=%s, tx_ref=%s, amount=%s, currency=%s)",
                transaction_id,
                reference,
                result.status.value,
                result.tx_ref,
                result.amount,
                result.currency,
            )
            return self._fail(journey, UNCONFIRMED_MESSAGE, reference, result)

        journey.advance(JourneyState.CONFIRMED)
        logger.info("Payment %s confirmed", reference)
        return JourneyOutcome(
            state=journey.state,
            message=CONFIRMED_MESSAGE,
            transaction_reference=reference,
            payment=result,
        )

    async def _verify_with_backoff(self, transaction_id: str) -> PaymentResult:
        attempt = 0
        while True:
            try:
                return await self.verifier.verify_payment(transaction_id)
            except TransientNetworkError:
                if attempt >= self.max_retries:
                    raise
                delay = self.backoff * (2 ** attempt)
                attempt += 1
                logger.info("Retrying verification of %s in %.1fs (attempt %s)", transaction_id, delay, attempt)
                await self.sleep(delay)

    def _matches(self, result: PaymentResult, context: PendingTransactionContext) -> bool:
        return (
            result.status is PaymentStatus.SUCCESS
            and result.tx_ref == context.transaction_reference
            and (result.currency or "").upper() == self.currency.upper()
            and result.amount is not None
            and result.amount >= context.amount
        )

    @staticmethod
    def _fail(
        journey: PaymentJourney,
        message: str,
        reference: Optional[str] = None,
        result: Optional[PaymentResult] = None,
    ) -> JourneyOutcome:
        journey.advance(JourneyState.FAILED)
        return JourneyOutcome(
            state=journey.state,
            message=message,
            transaction_reference=reference,
            payment=result,
        )
