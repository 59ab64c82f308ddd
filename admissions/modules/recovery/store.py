"""Single-slot store that carries a pending payment across the gateway redirect."""

from __future__ import annotations

import logging
from typing import Optional

from .models import PendingTransactionContext
from .storage import SlotStorage

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "payment_pending"


class SessionRecoveryStore:
    """Holds at most one :class:`PendingTransactionContext`.

    The slot is not signed; it only saves the confirmation step from asking
    the user again. Nothing read from it is proof of payment.
    """

    def __init__(self, storage: SlotStorage, slot_key: str = DEFAULT_SLOT_KEY) -> None:
        self._storage = storage
        self._slot_key = slot_key

    async def set(self, context: PendingTransactionContext) -> None:
        await self._storage.write(self._slot_key, context.to_json())
        logger.debug("Stored pending transaction %s", context.transaction_reference)

    async def consume(
        self, expected_reference: Optional[str] = None
    ) -> PendingTransactionContext | None:
        raw = await self._storage.take(self._slot_key)
        if raw is None:
            return None
        try:
            context = PendingTransactionContext.from_json(raw)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarding unreadable pending transaction: %s", exc)
            return None

        if expected_reference is not None and context.transaction_reference != expected_reference:
            logger.warning(
                "Pending transaction %s does not match echoed reference %s",
                context.transaction_reference,
                expected_reference,
            )
            return None
        return context


__all__ = ["DEFAULT_SLOT_KEY", "SessionRecoveryStore"]
