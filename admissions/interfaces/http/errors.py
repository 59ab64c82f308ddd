"""Translate classified service errors into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from admissions.core.errors import (
    AdmissionsError,
    AuthorizationError,
    BackendPersistenceError,
    ClientRequestError,
    ConfigurationError,
    PaymentReconciliationRequired,
    ServiceUnavailableError,
    TransientNetworkError,
    UpstreamServiceError,
)
from admissions.modules.applications import ApplicationNotFoundError

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their bases.
_STATUS_BY_ERROR: tuple[tuple[type[AdmissionsError], int], ...] = (
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (AuthorizationError, status.HTTP_401_UNAUTHORIZED),
    (ApplicationNotFoundError, status.HTTP_404_NOT_FOUND),
    (ClientRequestError, status.HTTP_400_BAD_REQUEST),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (PaymentReconciliationRequired, status.HTTP_409_CONFLICT),
    (TransientNetworkError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UpstreamServiceError, status.HTTP_502_BAD_GATEWAY),
    (BackendPersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: AdmissionsError, context: str) -> HTTPException:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error("%s failed: %s (%s)", context, exc.message, exc.code)
    else:
        logger.info("%s rejected: %s (%s)", context, exc.message, exc.code)

    detail: object = exc.message
    if isinstance(exc, ServiceUnavailableError):
        detail = {"message": exc.message, "retry_count": exc.retry_count}
    elif isinstance(exc, PaymentReconciliationRequired):
        detail = {"message": exc.message, "reference": exc.reference}

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


__all__ = ["to_http_exception"]
