"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_app_container,
    get_application_service,
    get_checkout_service,
    get_confirmation_service,
    get_health_monitor,
    get_profile_id,
    get_recovery_store,
)

__all__ = [
    "get_db_session",
    "get_app_container",
    "get_application_service",
    "get_checkout_service",
    "get_confirmation_service",
    "get_health_monitor",
    "get_profile_id",
    "get_recovery_store",
]
