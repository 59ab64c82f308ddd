"""SQLAlchemy-backed repository implementations."""

from .application_repository import SqlApplicationRepository
from .session_slot_repository import SqlSlotStorage

__all__ = [
    "SqlApplicationRepository",
    "SqlSlotStorage",
]
