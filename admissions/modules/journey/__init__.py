"""Payment journey wiring: checkout and confirmation."""

from .checkout import CheckoutService, payment_details_for
from .confirmation import ConfirmationService
from .models import (
    CheckoutResult,
    InvalidJourneyTransition,
    JourneyOutcome,
    JourneyState,
    PaymentJourney,
)

__all__ = [
    "CheckoutResult",
    "CheckoutService",
    "ConfirmationService",
    "InvalidJourneyTransition",
    "JourneyOutcome",
    "JourneyState",
    "PaymentJourney",
    "payment_details_for",
]
