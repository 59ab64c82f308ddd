"""Context that has to survive the round trip to the payment page."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class PendingTransactionContext:
    transaction_reference: str
    amount: int
    status: str = "pending"
    customer: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)

    @classmethod
    def from_json(cls, raw: str) -> "PendingTransactionContext":
        data = json.loads(raw)
        return cls(
            transaction_reference=data["transaction_reference"],
            amount=data["amount"],
            status=data.get("status", "pending"),
            customer=dict(data.get("customer") or {}),
        )
