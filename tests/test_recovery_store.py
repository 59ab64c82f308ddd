"""SessionRecoveryStore over in-memory and SQL slot storage."""

from __future__ import annotations

import pytest

from admissions.infrastructure.database.repositories import SqlSlotStorage
from admissions.modules.recovery import (
    InMemorySlotStorage,
    PendingTransactionContext,
    SessionRecoveryStore,
)


def _context(reference: str = "FTI-1760864400000-42", amount: int = 100000) -> PendingTransactionContext:
    return PendingTransactionContext(
        transaction_reference=reference,
        amount=amount,
        customer={"email": "chidinma@example.com", "name": "Chidinma Okafor"},
    )


@pytest.mark.asyncio
async def test_consume_returns_stored_context_once():
    store = SessionRecoveryStore(InMemorySlotStorage())
    await store.set(_context())

    assert await store.consume() == _context()
    assert await store.consume() is None


@pytest.mark.asyncio
async def test_consume_on_empty_store():
    assert await SessionRecoveryStore(InMemorySlotStorage()).consume() is None


@pytest.mark.asyncio
async def test_set_overwrites_previous_context():
    store = SessionRecoveryStore(InMemorySlotStorage())
    await store.set(_context("FTI-1-1"))
    await store.set(_context("FTI-2-2", amount=70000))

    consumed = await store.consume()

    assert consumed.transaction_reference == "FTI-2-2"
    assert consumed.amount == 70000


@pytest.mark.asyncio
async def test_mismatched_reference_clears_slot():
    storage = InMemorySlotStorage()
    store = SessionRecoveryStore(storage)
    await store.set(_context("FTI-1-1"))

    assert await store.consume(expected_reference="FTI-9-9") is None
    assert len(storage) == 0
    assert await store.consume(expected_reference="FTI-1-1") is None


@pytest.mark.asyncio
async def test_unreadable_slot_is_discarded():
    storage = InMemorySlotStorage()
    await storage.write("payment_pending", "{not json")

    assert await SessionRecoveryStore(storage).consume() is None
    assert len(storage) == 0


@pytest.mark.asyncio
async def test_sql_storage_survives_a_new_session(session_factory):
    async with session_factory() as session:
        await SessionRecoveryStore(SqlSlotStorage(session, "profile-a")).set(_context())
        await session.commit()

    async with session_factory() as session:
        store = SessionRecoveryStore(SqlSlotStorage(session, "profile-a"))
        consumed = await store.consume(expected_reference="FTI-1760864400000-42")
        await session.commit()

    assert consumed == _context()

    async with session_factory() as session:
        assert await SessionRecoveryStore(SqlSlotStorage(session, "profile-a")).consume() is None


@pytest.mark.asyncio
async def test_sql_storage_is_isolated_per_profile(db_session):
    await SessionRecoveryStore(SqlSlotStorage(db_session, "profile-a")).set(_context())

    assert await SessionRecoveryStore(SqlSlotStorage(db_session, "profile-b")).consume() is None
    assert await SessionRecoveryStore(SqlSlotStorage(db_session, "profile-a")).consume() == _context()


@pytest.mark.asyncio
async def test_sql_storage_overwrites_in_place(db_session):
    store = SessionRecoveryStore(SqlSlotStorage(db_session, "profile-a"))
    await store.set(_context("FTI-1-1"))
    await store.set(_context("FTI-2-2"))

    assert (await store.consume()).transaction_reference == "FTI-2-2"
    assert await store.consume() is None
