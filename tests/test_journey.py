"""Checkout and confirmation legs of the payment journey."""

from __future__ import annotations

import pytest
import pytest_asyncio

from admissions.core.errors import (
    AuthorizationError,
    ClientRequestError,
    ServiceUnavailableError,
    TransientNetworkError,
    UpstreamServiceError,
)
from admissions.infrastructure.http import JsonHttpClient
from admissions.modules.applications import (
    ApplicationDraft,
    ApplicationForm,
    ApplicationSubmissionService,
)
from admissions.modules.health import HealthMonitor
from admissions.modules.identity import ANONYMOUS
from admissions.modules.journey import (
    CheckoutService,
    ConfirmationService,
    InvalidJourneyTransition,
    JourneyState,
    PaymentJourney,
)
from admissions.modules.journey.confirmation import (
    CANCELLED_MESSAGE,
    CONFIRMED_MESSAGE,
    NOT_FOUND_MESSAGE,
    UNCONFIRMED_MESSAGE,
)
from admissions.modules.payments import PaymentOrchestrator, PaymentResult
from admissions.modules.recovery import (
    InMemorySlotStorage,
    PendingTransactionContext,
    SessionRecoveryStore,
)

SECRET = "FLWSECK_TEST-123"
REFERENCE = "FTI-1760864400000-42"


async def _monitor(online: bool, sleep) -> HealthMonitor:
    async def probe() -> None:
        if not online:
            raise UpstreamServiceError("Health check failed with status 500")

    monitor = HealthMonitor(probe, max_retries=0, sleep=sleep)
    await monitor.check_status()
    return monitor


@pytest_asyncio.fixture
async def orchestrator(gateway, sleep_recorder):
    client = JsonHttpClient(gateway.base_url, bearer_token=SECRET, timeout=5.0)
    try:
        yield PaymentOrchestrator(
            client,
            secret_key=SECRET,
            redirect_target="https://apply.example.edu/apply/confirmation",
            branding_title="FolioTech Institute",
            branding_logo="https://cdn.example/logo.png",
            sleep=sleep_recorder,
        )
    finally:
        await client.close()


def _checkout(applications, orchestrator, store, monitor) -> CheckoutService:
    return CheckoutService(
        applications=applications,
        orchestrator=orchestrator,
        recovery_store=store,
        health=monitor,
        tuition_fee=70000,
        accommodation_fee=30000,
    )


@pytest.mark.asyncio
async def test_checkout_redirects_and_stores_pending_context(
    gateway, orchestrator, application_repository, applicant_gate, form_data, sleep_recorder
):
    applications = ApplicationSubmissionService(application_repository, applicant_gate)
    submitted = await applications.submit(ApplicationForm.model_validate(form_data))
    store = SessionRecoveryStore(InMemorySlotStorage())
    monitor = await _monitor(True, sleep_recorder)

    result = await _checkout(applications, orchestrator, store, monitor).start_checkout(
        submitted.application_id
    )
    await monitor.aclose()

    assert result.state is JourneyState.REDIRECTED
    assert result.amount == 100000
    assert result.redirect_url.endswith(result.transaction_reference)
    assert gateway.payment_requests[0]["payload"]["amount"] == 100000
    assert gateway.payment_requests[0]["payload"]["meta"]["address"] == (
        "12 Marina Road, Lagos Island, Anambra, Nigerian"
    )

    pending = await store.consume(expected_reference=result.transaction_reference)
    assert pending.amount == 100000
    assert pending.status == "pending"
    assert pending.customer["email"] == "chidinma@example.com"


@pytest.mark.asyncio
async def test_checkout_without_accommodation_charges_tuition_only(
    gateway, orchestrator, application_repository, applicant_gate, form_data, sleep_recorder
):
    form_data["accommodation"]["needsAccommodation"] = False
    applications = ApplicationSubmissionService(application_repository, applicant_gate)
    submitted = await applications.submit(ApplicationForm.model_validate(form_data))
    monitor = await _monitor(True, sleep_recorder)

    result = await _checkout(
        applications, orchestrator, SessionRecoveryStore(InMemorySlotStorage()), monitor
    ).start_checkout(submitted.application_id)
    await monitor.aclose()

    assert result.amount == 70000
    assert gateway.payment_requests[0]["payload"]["meta"]["accommodation"] == "No"


@pytest.mark.asyncio
async def test_checkout_refused_while_backend_offline(
    gateway, orchestrator, application_repository, applicant_gate, form_data, sleep_recorder
):
    applications = ApplicationSubmissionService(application_repository, applicant_gate)
    submitted = await applications.submit(ApplicationForm.model_validate(form_data))
    storage = InMemorySlotStorage()
    monitor = await _monitor(False, sleep_recorder)

    with pytest.raises(ServiceUnavailableError) as excinfo:
        await _checkout(applications, orchestrator, SessionRecoveryStore(storage), monitor).start_checkout(
            submitted.application_id
        )
    await monitor.aclose()

    assert excinfo.value.retry_count == 0
    assert gateway.payment_requests == []
    assert len(storage) == 0


@pytest.mark.asyncio
async def test_checkout_requires_a_submitted_application(
    gateway, orchestrator, application_repository, applicant_gate, sleep_recorder
):
    applications = ApplicationSubmissionService(application_repository, applicant_gate)
    draft_id = await applications.save_draft(ApplicationDraft())
    monitor = await _monitor(True, sleep_recorder)

    with pytest.raises(ClientRequestError):
        await _checkout(
            applications, orchestrator, SessionRecoveryStore(InMemorySlotStorage()), monitor
        ).start_checkout(draft_id)
    await monitor.aclose()

    assert gateway.payment_requests == []


@pytest.mark.asyncio
async def test_checkout_requires_identity(gateway, orchestrator, application_repository, sleep_recorder):
    applications = ApplicationSubmissionService(application_repository, ANONYMOUS)
    monitor = await _monitor(True, sleep_recorder)

    with pytest.raises(AuthorizationError):
        await _checkout(
            applications, orchestrator, SessionRecoveryStore(InMemorySlotStorage()), monitor
        ).start_checkout("any")
    await monitor.aclose()

    assert application_repository.calls == []


class ScriptedVerifier:
    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[str] = []

    async def verify_payment(self, transaction_id: str) -> PaymentResult:
        self.calls.append(transaction_id)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _verified(status: str = "successful", **overrides) -> PaymentResult:
    data = {
        "id": 4821937,
        "tx_ref": REFERENCE,
        "flw_ref": "FLW-MOCK-9c1f",
        "amount": 100000,
        "currency": "NGN",
        "status": status,
    }
    data.update(overrides)
    return PaymentResult.from_gateway({"status": "success", "data": data})


async def _confirmation(verifier, sleep, pending: bool = True) -> ConfirmationService:
    store = SessionRecoveryStore(InMemorySlotStorage())
    if pending:
        await store.set(PendingTransactionContext(transaction_reference=REFERENCE, amount=100000))
    return ConfirmationService(verifier=verifier, recovery_store=store, sleep=sleep)


@pytest.mark.asyncio
async def test_confirmation_succeeds_for_matching_transaction(sleep_recorder):
    verifier = ScriptedVerifier(_verified())
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937", status="successful")

    assert outcome.confirmed
    assert outcome.message == CONFIRMED_MESSAGE
    assert outcome.transaction_reference == REFERENCE
    assert verifier.calls == ["4821937"]


@pytest.mark.asyncio
async def test_confirmation_is_single_use(sleep_recorder):
    verifier = ScriptedVerifier(_verified(), _verified())
    service = await _confirmation(verifier, sleep_recorder)

    await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")
    replay = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")

    assert replay.state is JourneyState.FAILED
    assert replay.message == NOT_FOUND_MESSAGE
    assert verifier.calls == ["4821937"]


@pytest.mark.asyncio
async def test_confirmation_without_pending_context(sleep_recorder):
    verifier = ScriptedVerifier()
    service = await _confirmation(verifier, sleep_recorder, pending=False)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")

    assert outcome.message == NOT_FOUND_MESSAGE
    assert verifier.calls == []


@pytest.mark.asyncio
async def test_confirmation_rejects_foreign_reference(sleep_recorder):
    verifier = ScriptedVerifier()
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref="FTI-1-1", transaction_id="4821937")

    assert outcome.message == NOT_FOUND_MESSAGE
    assert verifier.calls == []


@pytest.mark.asyncio
async def test_cancelled_payment_is_not_verified(sleep_recorder):
    verifier = ScriptedVerifier()
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id=None, status="cancelled")

    assert outcome.state is JourneyState.FAILED
    assert outcome.message == CANCELLED_MESSAGE
    assert outcome.transaction_reference == REFERENCE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "result",
    [
        _verified(status="failed"),
        _verified(tx_ref="FTI-1-1"),
        _verified(amount=50000),
        _verified(currency="USD"),
    ],
)
async def test_mismatched_gateway_result_is_unconfirmed(sleep_recorder, result):
    service = await _confirmation(ScriptedVerifier(result), sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937", status="successful")

    assert outcome.state is JourneyState.FAILED
    assert outcome.message == UNCONFIRMED_MESSAGE
    assert outcome.payment is result


@pytest.mark.asyncio
async def test_verification_retries_transient_errors_with_backoff(sleep_recorder):
    verifier = ScriptedVerifier(
        TransientNetworkError("Network error"),
        TransientNetworkError("Network error"),
        _verified(),
    )
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")

    assert outcome.confirmed
    assert sleep_recorder.delays == [2.0, 4.0]
    assert len(verifier.calls) == 3


@pytest.mark.asyncio
async def test_verification_gives_up_after_retries(sleep_recorder):
    verifier = ScriptedVerifier(*[TransientNetworkError("Network error")] * 4)
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")

    assert outcome.state is JourneyState.FAILED
    assert outcome.message == "Network error"
    assert sleep_recorder.delays == [2.0, 4.0, 8.0]


@pytest.mark.asyncio
async def test_non_transient_verification_error_is_not_retried(sleep_recorder):
    verifier = ScriptedVerifier(UpstreamServiceError("Gateway error"))
    service = await _confirmation(verifier, sleep_recorder)

    outcome = await service.confirm(tx_ref=REFERENCE, transaction_id="4821937")

    assert outcome.message == "Gateway error"
    assert sleep_recorder.delays == []


def test_journey_follows_allowed_transitions():
    journey = PaymentJourney()
    for state in (
        JourneyState.PENDING_PAYMENT,
        JourneyState.REDIRECTED,
        JourneyState.VERIFYING,
        JourneyState.CONFIRMED,
    ):
        journey.advance(state)

    assert journey.is_terminal
    assert journey.history[0] is JourneyState.DRAFT
    assert journey.history[-1] is JourneyState.CONFIRMED


@pytest.mark.parametrize(
    ("start", "target"),
    [
        (JourneyState.DRAFT, JourneyState.REDIRECTED),
        (JourneyState.REDIRECTED, JourneyState.CONFIRMED),
        (JourneyState.CONFIRMED, JourneyState.FAILED),
        (JourneyState.FAILED, JourneyState.PENDING_PAYMENT),
    ],
)
def test_journey_rejects_unknown_edges(start, target):
    with pytest.raises(InvalidJourneyTransition):
        PaymentJourney(start).advance(target)
