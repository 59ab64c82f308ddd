"""SQLAlchemy slot storage keyed by browser profile."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.errors import BackendPersistenceError
from admissions.db.models import SessionSlot


class SqlSlotStorage:
    """Slots of one profile; a profile holds one row per key."""

    def __init__(self, session: AsyncSession, profile_id: str) -> None:
        self._session = session
        self._profile_id = profile_id

    async def write(self, key: str, value: str) -> None:
        try:
            model = await self._session.get(SessionSlot, (self._profile_id, key))
            if model is None:
                self._session.add(SessionSlot(profile_id=self._profile_id, slot_key=key, value=value))
            else:
                model.value = value
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc

    async def take(self, key: str) -> str | None:
        stmt = (
            delete(SessionSlot)
            .where(SessionSlot.profile_id == self._profile_id, SessionSlot.slot_key == key)
            .returning(SessionSlot.value)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise BackendPersistenceError(str(exc)) from exc
        return result.scalar_one_or_none()
