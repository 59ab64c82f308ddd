"""Domain service for drafting and submitting applications."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.modules.identity import IdentityGate

from .exceptions import ApplicationNotFoundError
from .forms import ApplicationDraft, ApplicationForm
from .models import ApplicationRecord, ApplicationStatus, SubmissionResult
from .repository import ApplicationRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ApplicationSubmissionService:
    repository: ApplicationRepository
    identity_gate: IdentityGate
    clock: Callable[[], datetime] = field(default=_utcnow)

    @classmethod
    def with_session(
        cls, session: AsyncSession, identity_gate: IdentityGate
    ) -> "ApplicationSubmissionService":
        from admissions.infrastructure.database.repositories import SqlApplicationRepository

        return cls(SqlApplicationRepository(session), identity_gate)

    async def save_draft(
        self, partial: ApplicationDraft, existing_draft_id: Optional[str] = None
    ) -> str:
        identity = self.identity_gate.require("You must be signed in to save a draft")
        now = self.clock()
        sections = partial.sections()

        if existing_draft_id:
            record = await self.repository.update_draft(
                existing_draft_id,
                owner_id=identity.id,
                sections=sections,
                status=ApplicationStatus.DRAFT,
                timestamp=now,
            )
            if record is None:
                raise ApplicationNotFoundError(existing_draft_id)
        else:
            record = await self.repository.insert(
                owner_id=identity.id,
                sections=sections,
                status=ApplicationStatus.DRAFT,
                timestamp=now,
            )
        logger.debug("Saved draft %s for %s", record.id, identity.id)
        return record.id

    async def submit(
        self, form: ApplicationForm, draft_id: Optional[str] = None
    ) -> SubmissionResult:
        """Persist a final application exactly once; failures are not retried."""
        identity = self.identity_gate.require("You must be signed in to submit an application")
        now = self.clock()
        sections = form.sections()

        if draft_id:
            record = await self.repository.update_draft(
                draft_id,
                owner_id=identity.id,
                sections=sections,
                status=ApplicationStatus.PENDING,
                timestamp=now,
            )
            if record is None:
                raise ApplicationNotFoundError(draft_id)
        else:
            record = await self.repository.insert(
                owner_id=identity.id,
                sections=sections,
                status=ApplicationStatus.PENDING,
                timestamp=now,
            )
        logger.info("Application %s submitted by %s", record.id, identity.id)
        return SubmissionResult(success=True, application_id=record.id)

    async def list(self) -> Sequence[ApplicationRecord]:
        identity = self.identity_gate.require("You must be signed in to view applications")
        return await self.repository.list_for_owner(identity.id)

    async def get_by_id(self, application_id: str) -> ApplicationRecord:
        identity = self.identity_gate.require("You must be signed in to view applications")
        record = await self.repository.get_for_owner(application_id, identity.id)
        if record is None:
            raise ApplicationNotFoundError(application_id)
        return record
