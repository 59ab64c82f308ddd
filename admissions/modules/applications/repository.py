"""Repository protocol for application records.

Every method takes the owner id; implementations must filter by it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from .models import ApplicationRecord, ApplicationStatus


class ApplicationRepository(Protocol):
    async def insert(
        self,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> ApplicationRecord:
        ...

    async def update_draft(
        self,
        record_id: str,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> ApplicationRecord | None:
        """Update a record only while it is still a draft of ``owner_id``."""
        ...

    async def get_for_owner(self, record_id: str, owner_id: str) -> ApplicationRecord | None:
        ...

    async def list_for_owner(self, owner_id: str) -> Sequence[ApplicationRecord]:
        ...
