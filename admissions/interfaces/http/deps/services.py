"""Service dependency providers."""

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.container import ApplicationContainer, get_container
from admissions.core.security import get_identity_gate
from admissions.db.models import generate_uuid
from admissions.infrastructure.database.repositories import SqlSlotStorage
from admissions.modules.applications import ApplicationSubmissionService
from admissions.modules.health import HealthMonitor
from admissions.modules.identity import IdentityGate
from admissions.modules.journey import CheckoutService, ConfirmationService
from admissions.modules.recovery import SessionRecoveryStore

from .database import get_db_session


def get_app_container() -> ApplicationContainer:
    return get_container()


def get_health_monitor(container: ApplicationContainer = Depends(get_app_container)) -> HealthMonitor:
    return container.health_monitor


def get_profile_id(
    request: Request,
    response: Response,
    container: ApplicationContainer = Depends(get_app_container),
) -> str:
    """Browser profile id, kept in a cookie so it survives the gateway redirect."""
    session_settings = container.settings.session
    profile_id = request.cookies.get(session_settings.cookie_name)
    if not profile_id:
        profile_id = generate_uuid()
        response.set_cookie(
            session_settings.cookie_name,
            profile_id,
            max_age=session_settings.cookie_max_age,
            httponly=True,
            samesite="lax",
        )
    return profile_id


def get_recovery_store(
    profile_id: str = Depends(get_profile_id),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> SessionRecoveryStore:
    return SessionRecoveryStore(
        SqlSlotStorage(db, profile_id),
        slot_key=container.settings.session.slot_key,
    )


def get_application_service(
    db: AsyncSession = Depends(get_db_session),
    gate: IdentityGate = Depends(get_identity_gate),
) -> ApplicationSubmissionService:
    return ApplicationSubmissionService.with_session(db, gate)


def get_checkout_service(
    applications: ApplicationSubmissionService = Depends(get_application_service),
    store: SessionRecoveryStore = Depends(get_recovery_store),
    container: ApplicationContainer = Depends(get_app_container),
) -> CheckoutService:
    return CheckoutService(
        applications=applications,
        orchestrator=container.orchestrator,
        recovery_store=store,
        health=container.health_monitor,
        tuition_fee=container.settings.payments.tuition_fee,
        accommodation_fee=container.settings.payments.accommodation_fee,
    )


def get_confirmation_service(
    store: SessionRecoveryStore = Depends(get_recovery_store),
    container: ApplicationContainer = Depends(get_app_container),
) -> ConfirmationService:
    payments = container.settings.payments
    return ConfirmationService(
        verifier=container.verifier,
        recovery_store=store,
        currency=container.settings.gateway.currency,
        max_retries=payments.verify_max_retries,
        backoff=payments.verify_backoff,
    )


__all__ = [
    "get_app_container",
    "get_application_service",
    "get_checkout_service",
    "get_confirmation_service",
    "get_health_monitor",
    "get_profile_id",
    "get_recovery_store",
]
