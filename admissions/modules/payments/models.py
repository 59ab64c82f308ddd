"""Payment values exchanged with the gateway."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class TransactionReference:
    """Client-minted idempotency token: ``{prefix}-{timestamp_ms}-{random}``."""

    prefix: str
    timestamp: int
    random: int

    @classmethod
    def mint(cls, prefix: str = "FTI") -> "TransactionReference":
        return cls(
            prefix=prefix,
            timestamp=time.time_ns() // 1_000_000,
            random=secrets.randbelow(1_000_000),
        )

    @classmethod
    def parse(cls, value: str) -> "TransactionReference":
        prefix, timestamp, random = value.rsplit("-", 2)
        return cls(prefix=prefix, timestamp=int(timestamp), random=int(random))

    def __str__(self) -> str:
        return f"{self.prefix}-{self.timestamp}-{self.random}"


@dataclass(slots=True, frozen=True)
class Address:
    street: str
    city: str = ""
    state: str = ""
    country: str = ""

    def __str__(self) -> str:
        return ", ".join(part for part in (self.street, self.city, self.state, self.country) if part)


@dataclass(slots=True, frozen=True)
class Customer:
    name: str
    email: str
    phone: str

    def to_payload(self) -> dict[str, str]:
        return {"email": self.email, "name": self.name, "phonenumber": self.phone}


@dataclass(slots=True, frozen=True)
class PaymentDetails:
    full_name: str
    email: str
    phone: str
    address: Address
    accommodation: bool
    total_amount: int

    @property
    def customer(self) -> Customer:
        return Customer(name=self.full_name, email=self.email, phone=self.phone)


@dataclass(slots=True, frozen=True)
class Branding:
    title: str
    description: str
    logo: str


@dataclass(slots=True, frozen=True)
class PaymentRequest:
    reference: TransactionReference
    amount: int
    currency: str
    customer: Customer
    redirect_target: str
    metadata: dict[str, str]
    branding: Branding

    def to_payload(self) -> dict[str, Any]:
        return {
            "tx_ref": str(self.reference),
            "amount": self.amount,
            "currency": self.currency,
            "redirect_url": self.redirect_target,
            "customer": self.customer.to_payload(),
            "meta": dict(self.metadata),
            "customizations": {
                "title": self.branding.title,
                "description": self.branding.description,
                "logo": self.branding.logo,
            },
        }


@dataclass(slots=True, frozen=True)
class InitializedPayment:
    redirect_url: str
    reference: str
    attempts: int


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class PaymentResult:
    status: PaymentStatus
    gateway_reference: Optional[str]
    amount: Optional[float]
    customer_echo: dict[str, Any] = field(default_factory=dict)
    transaction_id: Optional[str] = None
    tx_ref: Optional[str] = None
    currency: Optional[str] = None

    @classmethod
    def from_gateway(cls, body: Any) -> "PaymentResult":
        if not isinstance(body, dict):
            body = {}
        data = body.get("data")
        if not isinstance(data, dict):
            data = {}
        gateway_status = str(data.get("status") or "").lower()
        if body.get("status") == "success" and gateway_status == "successful":
            status = PaymentStatus.SUCCESS
        elif gateway_status == "failed":
            status = PaymentStatus.FAILED
        else:
            status = PaymentStatus.PENDING

        amount = data.get("amount")
        transaction_id = data.get("id")
        return cls(
            status=status,
            gateway_reference=data.get("flw_ref"),
            amount=float(amount) if amount is not None else None,
            customer_echo=dict(data.get("customer") or {}),
            transaction_id=str(transaction_id) if transaction_id is not None else None,
            tx_ref=data.get("tx_ref"),
            currency=data.get("currency"),
        )
