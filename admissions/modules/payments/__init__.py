"""Payment gateway orchestration."""

from .classification import classify_gateway_error
from .models import (
    Address,
    Customer,
    InitializedPayment,
    PaymentDetails,
    PaymentRequest,
    PaymentResult,
    PaymentStatus,
    TransactionReference,
)
from .orchestrator import PaymentOrchestrator, gateway_client_from_settings
from .verifier import PaymentVerifier

__all__ = [
    "Address",
    "Customer",
    "InitializedPayment",
    "PaymentDetails",
    "PaymentOrchestrator",
    "PaymentRequest",
    "PaymentResult",
    "PaymentStatus",
    "PaymentVerifier",
    "TransactionReference",
    "classify_gateway_error",
    "gateway_client_from_settings",
]
