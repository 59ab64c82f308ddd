"""Checkout and the confirmation leg of the payment journey."""

from typing import Optional

from fastapi import APIRouter, Depends

from admissions.core.errors import AdmissionsError
from admissions.interfaces.http.deps import get_checkout_service, get_confirmation_service
from admissions.interfaces.http.errors import to_http_exception
from admissions.modules.journey import CheckoutService, ConfirmationService
from admissions.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    ConfirmationResponse,
    PaymentResultResponse,
)

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse, summary="Start paying for a submitted application")
async def checkout(
    payload: CheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    try:
        result = await service.start_checkout(payload.application_id)
    except AdmissionsError as exc:
        raise to_http_exception(exc, "Checkout") from exc
    return CheckoutResponse(
        redirect_url=result.redirect_url,
        transaction_reference=result.transaction_reference,
        amount=result.amount,
        state=result.state,
    )


@router.get("/confirmation", response_model=ConfirmationResponse, summary="Confirm a payment after the gateway redirect")
async def confirmation(
    status: Optional[str] = None,
    tx_ref: Optional[str] = None,
    transaction_id: Optional[str] = None,
    service: ConfirmationService = Depends(get_confirmation_service),
) -> ConfirmationResponse:
    outcome = await service.confirm(tx_ref=tx_ref, transaction_id=transaction_id, status=status)
    payment = None
    if outcome.payment is not None:
        payment = PaymentResultResponse.model_validate(outcome.payment)
    return ConfirmationResponse(
        state=outcome.state,
        confirmed=outcome.confirmed,
        message=outcome.message,
        transaction_reference=outcome.transaction_reference,
        payment=payment,
    )
