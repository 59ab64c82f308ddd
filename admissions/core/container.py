"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from admissions.core.config import Settings, get_settings
from admissions.infrastructure.database.session import get_engine
from admissions.infrastructure.http import JsonHttpClient
from admissions.modules.health import HealthMonitor
from admissions.modules.payments import (
    PaymentOrchestrator,
    PaymentVerifier,
    gateway_client_from_settings,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    gateway_client: JsonHttpClient
    health_monitor: HealthMonitor
    orchestrator: PaymentOrchestrator
    verifier: PaymentVerifier

    @classmethod
    def build(cls, settings: Settings) -> "ApplicationContainer":
        gateway_client = gateway_client_from_settings(settings)
        return cls(
            settings=settings,
            gateway_client=gateway_client,
            health_monitor=HealthMonitor.from_settings(settings),
            orchestrator=PaymentOrchestrator.from_settings(settings, gateway_client),
            verifier=PaymentVerifier.from_settings(settings, gateway_client),
        )

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    async def startup(self) -> None:
        if self.settings.health.enabled:
            self.health_monitor.start()
            logger.info("Health monitor started")

    async def shutdown(self) -> None:
        await self.health_monitor.aclose()
        await self.gateway_client.close()


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer.build(get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
