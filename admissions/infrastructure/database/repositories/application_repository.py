"""SQLAlchemy implementation of the application repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.errors import BackendPersistenceError
from admissions.db.models import ApplicationRecord as ApplicationModel
from admissions.modules.applications.models import ApplicationRecord, ApplicationStatus
from admissions.modules.applications.repository import ApplicationRepository


class SqlApplicationRepository(ApplicationRepository):
    """Application repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(
        self,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> ApplicationRecord:
        model = ApplicationModel(
            owner_id=owner_id,
            status=status.value,
            created_at=timestamp,
            updated_at=timestamp,
            **sections,
        )
        try:
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc
        return self._to_domain(model)

    async def update_draft(
        self,
        record_id: str,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> ApplicationRecord | None:
        stmt = (
            update(ApplicationModel)
            .where(
                ApplicationModel.id == record_id,
                ApplicationModel.owner_id == owner_id,
                ApplicationModel.status == ApplicationStatus.DRAFT.value,
            )
            .values(status=status.value, updated_at=timestamp, **sections)
            .returning(ApplicationModel)
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalars().first()
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc
        return self._to_domain(model) if model else None

    async def get_for_owner(self, record_id: str, owner_id: str) -> ApplicationRecord | None:
        stmt = select(ApplicationModel).where(
            ApplicationModel.id == record_id,
            ApplicationModel.owner_id == owner_id,
        ).execution_options(populate_existing=True)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_for_owner(self, owner_id: str) -> Sequence[ApplicationRecord]:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.owner_id == owner_id)
            .order_by(ApplicationModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: ApplicationModel) -> ApplicationRecord:
        return ApplicationRecord(
            id=str(model.id),
            owner_id=model.owner_id,
            status=ApplicationStatus(model.status),
            personal_info=dict(model.personal_info or {}),
            academic_background=dict(model.academic_background or {}),
            program_selection=dict(model.program_selection or {}),
            accommodation=dict(model.accommodation or {}),
            referee=dict(model.referee or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
