"""Health state exposed to payment-dependent actions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class HealthStatus(str, Enum):
    CHECKING = "checking"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(slots=True, frozen=True)
class HealthSnapshot:
    status: HealthStatus
    retry_count: int
    max_retries: int
    last_checked_at: Optional[datetime] = None
    last_error: Optional[str] = None

    @property
    def is_online(self) -> bool:
        return self.status is HealthStatus.ONLINE
