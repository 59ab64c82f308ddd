"""Maps gateway responses onto the error taxonomy."""

from __future__ import annotations

from typing import Any, Optional

from admissions.core.errors import (
    AdmissionsError,
    AuthorizationError,
    ClientRequestError,
    TransientNetworkError,
    UpstreamServiceError,
)
from admissions.infrastructure.http.client import NETWORK_ERROR_MESSAGE

INVALID_KEY_MESSAGE = "Invalid API key. Please contact support."
INVALID_DETAILS_MESSAGE = "Invalid payment details. Please check and try again."
GATEWAY_DOWN_MESSAGE = "Payment gateway is temporarily down. Please try again in a few moments."
GENERIC_MESSAGE = "An error occurred while processing your payment. Please try again."


def classify_gateway_error(status: Optional[int], payload: Any = None) -> AdmissionsError:
    """``status`` is ``None`` when no response was received."""
    if status is None:
        return TransientNetworkError(NETWORK_ERROR_MESSAGE)
    if status == 503:
        return TransientNetworkError(GATEWAY_DOWN_MESSAGE, status=status)
    if status == 401:
        return AuthorizationError(INVALID_KEY_MESSAGE, status=status)
    if status == 400:
        message = payload.get("message") if isinstance(payload, dict) else None
        return ClientRequestError(message or INVALID_DETAILS_MESSAGE, status=status)
    if 400 <= status < 500:
        return ClientRequestError(GENERIC_MESSAGE, status=status)
    return UpstreamServiceError(GENERIC_MESSAGE, status=status)


def is_retryable(error: AdmissionsError) -> bool:
    return isinstance(error, TransientNetworkError)
