"""Client-visible payment journey."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from admissions.modules.payments import PaymentResult


class JourneyState(str, Enum):
    DRAFT = "draft"
    PENDING_PAYMENT = "pending_payment"
    REDIRECTED = "redirected"
    VERIFYING = "verifying"
    CONFIRMED = "confirmed"
    FAILED = "failed"


TRANSITIONS: dict[JourneyState, frozenset[JourneyState]] = {
    JourneyState.DRAFT: frozenset({JourneyState.PENDING_PAYMENT}),
    JourneyState.PENDING_PAYMENT: frozenset({JourneyState.REDIRECTED, JourneyState.FAILED}),
    JourneyState.REDIRECTED: frozenset({JourneyState.VERIFYING}),
    JourneyState.VERIFYING: frozenset({JourneyState.CONFIRMED, JourneyState.FAILED}),
    JourneyState.CONFIRMED: frozenset(),
    JourneyState.FAILED: frozenset(),
}


class InvalidJourneyTransition(Exception):
    """Raised when a journey is moved along an edge that does not exist."""

    def __init__(self, current: JourneyState, target: JourneyState) -> None:
        super().__init__(f"Cannot move payment journey from {current.value} to {target.value}")
        self.current = current
        self.target = target


class PaymentJourney:
    def __init__(self, state: JourneyState = JourneyState.DRAFT) -> None:
        self._state = state
        self.history: list[JourneyState] = [state]

    @property
    def state(self) -> JourneyState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self._state]

    def advance(self, target: JourneyState) -> JourneyState:
        if target not in TRANSITIONS[self._state]:
            raise InvalidJourneyTransition(self._state, target)
        self._state = target
        self.history.append(target)
        return target


@dataclass(slots=True, frozen=True)
class CheckoutResult:
    redirect_url: str
    transaction_reference: str
    amount: int
    state: JourneyState


@dataclass(slots=True, frozen=True)
class JourneyOutcome:
    state: JourneyState
    message: str
    transaction_reference: Optional[str] = None
    payment: Optional[PaymentResult] = None

    @property
    def confirmed(self) -> bool:
        return self.state is JourneyState.CONFIRMED
