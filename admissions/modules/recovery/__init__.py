"""Redirect-survival storage for pending payments."""

from .models import PendingTransactionContext
from .storage import InMemorySlotStorage, SlotStorage
from .store import DEFAULT_SLOT_KEY, SessionRecoveryStore

__all__ = [
    "DEFAULT_SLOT_KEY",
    "InMemorySlotStorage",
    "PendingTransactionContext",
    "SessionRecoveryStore",
    "SlotStorage",
]
