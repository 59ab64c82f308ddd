"""Pydantic schemas used across the HTTP interface."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from admissions.modules.health import HealthStatus
from admissions.modules.journey import JourneyState
from admissions.modules.payments import PaymentStatus


class HealthFunctionResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime


class HealthStatusResponse(BaseModel):
    status: HealthStatus
    retry_count: int
    max_retries: int
    last_checked_at: Optional[datetime] = None
    last_error: Optional[str] = None
    payments_enabled: bool

    model_config = ConfigDict(from_attributes=True)


class ApplicationResponse(BaseModel):
    id: str
    owner_id: str
    status: str
    personal_info: dict[str, Any] = Field(default_factory=dict)
    academic_background: dict[str, Any] = Field(default_factory=dict)
    program_selection: dict[str, Any] = Field(default_factory=dict)
    accommodation: dict[str, Any] = Field(default_factory=dict)
    referee: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ApplicationListResponse(BaseModel):
    total: int
    applications: list[ApplicationResponse]


class DraftSaveResponse(BaseModel):
    success: bool = True
    draft_id: str


class SubmissionResponse(BaseModel):
    success: bool
    message: str
    application_id: Optional[str] = None


class CheckoutRequest(BaseModel):
    application_id: str = Field(..., min_length=1)


class CheckoutResponse(BaseModel):
    redirect_url: str
    transaction_reference: str
    amount: int
    state: JourneyState


class PaymentResultResponse(BaseModel):
    status: PaymentStatus
    gateway_reference: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    transaction_id: Optional[str] = None
    tx_ref: Optional[str] = None
    customer_echo: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class ConfirmationResponse(BaseModel):
    state: JourneyState
    confirmed: bool
    message: str
    transaction_reference: Optional[str] = None
    payment: Optional[PaymentResultResponse] = None

    model_config = ConfigDict(from_attributes=True)
