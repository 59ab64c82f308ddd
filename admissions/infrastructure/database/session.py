"""Process-wide async engine and request-scoped sessions."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from admissions.core.config import Settings, get_settings
from admissions.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(settings: Settings) -> AsyncEngine:
    options: dict[str, Any] = {"echo": settings.database.echo or settings.debug}
    url = settings.database_url
    if url.startswith("sqlite"):
        # aiosqlite runs each connection on its own thread.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
        if settings.database.pool_size is not None:
            options["pool_size"] = settings.database.pool_size
        if settings.database.max_overflow is not None:
            options["max_overflow"] = settings.database.max_overflow
    return create_async_engine(url, **options)


def get_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        _engine = build_engine(settings or get_settings())
        _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
        logger.debug("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: committed on success, rolled back on error."""
    get_engine()
    assert _session_factory is not None
    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables; deployments run the Alembic migrations instead."""
    from admissions.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
