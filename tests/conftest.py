# tests/conftest.py
"""
Shared fixtures: sample form data, in-memory fakes, a throwaway SQLite
database and a fake payment gateway served by aiohttp.
"""

from __future__ import annotations

import asyncio
import copy
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional, Sequence

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from admissions.db import models  # noqa: F401
from admissions.infrastructure.database.base import Base
from admissions.modules.applications.models import ApplicationRecord, ApplicationStatus
from admissions.modules.identity import Identity, IdentityGate

APPLICANT = Identity(id="applicant-1", email="chidinma@example.com")
OTHER_APPLICANT = Identity(id="applicant-2", email="tunde@example.com")


def sample_form_data() -> dict[str, Any]:
    return {
        "personalInfo": {
            "surname": "Okafor",
            "firstName": "Chidinma",
            "contactAddress": "12 Marina Road, Lagos Island",
            "nationality": "Nigerian",
            "stateOfOrigin": "Anambra",
            "phoneNumber": "+2348012345678",
            "email": "chidinma@example.com",
            "dateOfBirth": "2000-05-14",
            "gender": "female",
            "maritalStatus": "single",
            "disability": {"hasDisability": False},
        },
        "academicBackground": {
            "educationLevel": "ssce",
            "certificates": [{"type": "WAEC", "grade": "B2", "year": "2018"}],
        },
        "programSelection": {
            "program": "computer-technology",
            "course": "software-engineering",
            "startDate": "2026-01-12",
            "studyMode": "full-time",
            "careerGoals": "Build reliable software for local businesses.",
        },
        "accommodation": {
            "needsAccommodation": True,
            "sponsorshipType": "guardian",
            "sponsorDetails": {
                "name": "Ngozi Okafor",
                "relationship": "Mother",
                "contact": "+2348098765432",
            },
        },
        "referee": {
            "name": "Emeka Obi",
            "address": "45 Allen Avenue, Ikeja, Lagos",
            "phone": "+2348033334444",
            "email": "emeka.obi@example.com",
            "relationship": "Teacher",
        },
    }


@pytest.fixture
def form_data() -> dict[str, Any]:
    return sample_form_data()


@pytest.fixture
def applicant_gate() -> IdentityGate:
    return IdentityGate(identity=APPLICANT)


@pytest.fixture
def other_gate() -> IdentityGate:
    return IdentityGate(identity=OTHER_APPLICANT)


class InMemoryApplicationRepository:
    """Owner-filtered application storage with call counting."""

    def __init__(self) -> None:
        self.rows: dict[str, ApplicationRecord] = {}
        self.calls: list[str] = []

    async def insert(
        self,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> ApplicationRecord:
        self.calls.append("insert")
        record = ApplicationRecord(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            status=status,
            created_at=timestamp,
            updated_at=timestamp,
            **copy.deepcopy(sections),
        )
        self.rows[record.id] = record
        return replace(record)

    async def update_draft(
        self,
        record_id: str,
        *,
        owner_id: str,
        sections: dict[str, dict[str, Any]],
        status: ApplicationStatus,
        timestamp: datetime,
    ) -> Optional[ApplicationRecord]:
        self.calls.append("update_draft")
        record = self.rows.get(record_id)
        if record is None or record.owner_id != owner_id or not record.is_draft:
            return None
        updated = replace(record, status=status, updated_at=timestamp, **copy.deepcopy(sections))
        self.rows[record_id] = updated
        return replace(updated)

    async def get_for_owner(self, record_id: str, owner_id: str) -> Optional[ApplicationRecord]:
        self.calls.append("get_for_owner")
        record = self.rows.get(record_id)
        if record is None or record.owner_id != owner_id:
            return None
        return replace(record)

    async def list_for_owner(self, owner_id: str) -> Sequence[ApplicationRecord]:
        self.calls.append("list_for_owner")
        records = [replace(r) for r in self.rows.values() if r.owner_id == owner_id]
        return sorted(records, key=lambda r: r.created_at, reverse=True)


@pytest.fixture
def application_repository() -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository()


class SleepRecorder:
    """Stands in for ``asyncio.sleep`` and remembers the requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'admissions-test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


class FakeGateway:
    """Scripted stand-in for the payment gateway's v3 API."""

    def __init__(self) -> None:
        self.payment_requests: list[dict[str, Any]] = []
        self.payment_responses: list[tuple[int, Any]] = []
        self.verify_requests: list[str] = []
        self.verify_responses: list[tuple[int, Any]] = []
        self.health_responses: list[tuple[int, Any]] = []
        self.delay: float = 0.0
        self.base_url = ""

    async def create_payment(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.payment_requests.append(
            {"payload": payload, "authorization": request.headers.get("Authorization")}
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.payment_responses:
            status, body = self.payment_responses.pop(0)
        else:
            status, body = 200, {
                "status": "success",
                "message": "Hosted Link",
                "data": {"link": f"https://checkout.example/pay/{payload['tx_ref']}"},
            }
        return web.json_response(body, status=status)

    async def verify(self, request: web.Request) -> web.Response:
        self.verify_requests.append(request.match_info["transaction_id"])
        status, body = self.verify_responses.pop(0) if self.verify_responses else (404, {})
        return web.json_response(body, status=status)

    async def health(self, request: web.Request) -> web.Response:
        status, body = self.health_responses.pop(0) if self.health_responses else (
            200,
            {"status": "healthy", "timestamp": "2026-10-19T09:00:00Z"},
        )
        return web.json_response(body, status=status)


@pytest_asyncio.fixture
async def gateway():
    fake = FakeGateway()
    app = web.Application()
    app.router.add_post("/v3/payments", fake.create_payment)
    app.router.add_get("/v3/transactions/{transaction_id}/verify", fake.verify)
    app.router.add_get("/functions/v1/health", fake.health)
    server = TestServer(app)
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    try:
        yield fake
    finally:
        await server.close()
