"""Starts the payment for a submitted application."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from admissions.core.errors import ClientRequestError, ServiceUnavailableError
from admissions.modules.applications import (
    ApplicationForm,
    ApplicationRecord,
    ApplicationStatus,
    ApplicationSubmissionService,
)
from admissions.modules.health import HealthMonitor
from admissions.modules.payments import Address, PaymentDetails, PaymentOrchestrator
from admissions.modules.recovery import PendingTransactionContext, SessionRecoveryStore

from .models import CheckoutResult, JourneyState, PaymentJourney

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Payment service is currently unavailable. Please try again shortly."


def payment_details_for(
    record: ApplicationRecord, *, tuition_fee: int, accommodation_fee: int
) -> PaymentDetails:
    form = ApplicationForm.model_validate(
        {
            "personal_info": record.personal_info,
            "academic_background": record.academic_background,
            "program_selection": record.program_selection,
            "accommodation": record.accommodation,
            "referee": record.referee,
        }
    )
    personal = form.personal_info
    needs_accommodation = form.accommodation.needs_accommodation
    return PaymentDetails(
        full_name=personal.full_name,
        email=personal.email,
        phone=personal.phone_number,
        address=Address(
            street=personal.contact_address,
            city="",
            state=personal.state_of_origin,
            country=personal.nationality,
        ),
        accommodation=needs_accommodation,
        total_amount=tuition_fee + (accommodation_fee if needs_accommodation else 0),
    )


@dataclass(slots=True)
class CheckoutService:
    applications: ApplicationSubmissionService
    orchestrator: PaymentOrchestrator
    recovery_store: SessionRecoveryStore
    health: HealthMonitor
    tuition_fee: int = 70000
    accommodation_fee: int = 30000

    async def start_checkout(self, application_id: str) -> CheckoutResult:
        journey = PaymentJourney()
        record = await self.applications.get_by_id(application_id)
        if record.status is not ApplicationStatus.PENDING:
            raise ClientRequestError("Only submitted applications can be paid for", status=400)
        journey.advance(JourneyState.PENDING_PAYMENT)

        snapshot = self.health.snapshot
        if not snapshot.is_online:
            raise ServiceUnavailableError(OFFLINE_MESSAGE, retry_count=snapshot.retry_count)

        details = payment_details_for(
            record,
            tuition_fee=self.tuition_fee,
            accommodation_fee=self.accommodation_fee,
        )
        initialized = await self.orchestrator.initialize_payment(details)

        await self.recovery_store.set(
            PendingTransactionContext(
                transaction_reference=initialized.reference,
                amount=details.total_amount,
                status="pending",
                customer=details.customer.to_payload(),
            )
        )
        journey.advance(JourneyState.REDIRECTED)
        logger.info(
            "Checkout for application %s redirected with reference %s",
            application_id,
            initialized.reference,
        )
        return CheckoutResult(
            redirect_url=initialized.redirect_url,
            transaction_reference=initialized.reference,
            amount=details.total_amount,
            state=journey.state,
        )
