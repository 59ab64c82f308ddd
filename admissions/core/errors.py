"""Error taxonomy shared by every layer of the service."""

from __future__ import annotations

from typing import Optional


class AdmissionsError(Exception):
    """Base class for classified service errors."""

    code = "admissions_error"

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ConfigurationError(AdmissionsError):
    """Raised when credentials or URLs are missing. Never retried."""

    code = "configuration_error"


class TransientNetworkError(AdmissionsError):
    """Raised on timeouts, missing responses and 503s."""

    code = "transient_network_error"


class PaymentReconciliationRequired(TransientNetworkError):
    """Raised when a payment attempt may have reached the gateway but no answer came back."""

    code = "payment_reconciliation_required"

    def __init__(self, message: str, *, reference: str, status: Optional[int] = None) -> None:
        super().__init__(message, status=status)
        self.reference = reference


class ClientRequestError(AdmissionsError):
    """Raised on 4xx responses other than 401."""

    code = "client_request_error"


class AuthorizationError(AdmissionsError):
    """Raised when the caller (or our gateway credential) is not authorised."""

    code = "authorization_error"


class BackendPersistenceError(AdmissionsError):
    """Raised on any data-layer failure; the backend message is kept verbatim."""

    code = "backend_persistence_error"


class UpstreamServiceError(AdmissionsError):
    """Raised when a remote service answers with an unexpected status or body."""

    code = "upstream_service_error"


class ServiceUnavailableError(AdmissionsError):
    """Raised when a payment action is attempted while the backend is not reachable."""

    code = "service_unavailable"

    def __init__(self, message: str, *, retry_count: int = 0) -> None:
        super().__init__(message)
        self.retry_count = retry_count


__all__ = [
    "AdmissionsError",
    "ConfigurationError",
    "TransientNetworkError",
    "PaymentReconciliationRequired",
    "ClientRequestError",
    "AuthorizationError",
    "BackendPersistenceError",
    "UpstreamServiceError",
    "ServiceUnavailableError",
]
