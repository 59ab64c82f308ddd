"""Backend availability monitor with bounded retries and periodic re-checks."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from admissions.core.config import Settings
from admissions.core.errors import ConfigurationError

from .models import HealthSnapshot, HealthStatus
from .probe import HealthProbe

logger = logging.getLogger(__name__)

Probe = Callable[[], Awaitable[None]]
Listener = Callable[[HealthSnapshot], None]
Sleep = Callable[[float], Awaitable[None]]


class HealthMonitor:
    """Tracks whether the backend service is reachable.

    Failures never escape :meth:`check_status`; they are recorded as the
    ``offline`` state. While offline, up to ``max_retries`` re-checks are
    scheduled ``retry_delay`` seconds apart, and every re-check bumps
    ``retry_count``. A periodic check runs every ``interval`` seconds once
    :meth:`start` has been called. Only one check is ever in flight.
    """

    def __init__(
        self,
        probe: Probe,
        *,
        max_retries: int = 3,
        retry_delay: float = 5.0,
        interval: float = 60.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._probe = probe
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.interval = interval
        self._sleep = sleep

        self._status = HealthStatus.CHECKING
        self._retry_count = 0
        self._last_checked_at: Optional[datetime] = None
        self._last_error: Optional[str] = None

        self._inflight: Optional[asyncio.Task] = None
        self._retry_task: Optional[asyncio.Task] = None
        self._periodic_task: Optional[asyncio.Task] = None
        self._listeners: list[Listener] = []
        self._disposed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "HealthMonitor":
        return cls(
            HealthProbe(settings.service, settings.health),
            max_retries=settings.health.max_retries,
            retry_delay=settings.health.retry_delay,
            interval=settings.health.interval,
        )

    @property
    def snapshot(self) -> HealthSnapshot:
        return HealthSnapshot(
            status=self._status,
            retry_count=self._retry_count,
            max_retries=self.max_retries,
            last_checked_at=self._last_checked_at,
            last_error=self._last_error,
        )

    @property
    def is_online(self) -> bool:
        return self._status is HealthStatus.ONLINE

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Begin periodic checks; the first one runs immediately."""
        if self._disposed:
            raise RuntimeError("HealthMonitor has been disposed")
        if self._periodic_task is None or self._periodic_task.done():
            self._periodic_task = asyncio.create_task(self._run_periodic())

    async def _run_periodic(self) -> None:
        while not self._disposed:
            await self.check_status()
            await self._sleep(self.interval)

    async def check_status(self) -> HealthSnapshot:
        if self._disposed:
            return self.snapshot
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Health check already in flight")
            return self.snapshot

        inflight = self._inflight = asyncio.create_task(self._probe())
        try:
            await inflight
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if self._disposed and inflight.cancelled() and current is not None and not current.cancelling():
                # Closed underneath a caller that is itself still running.
                return self.snapshot
            raise
        except ConfigurationError as exc:
            logger.error("API health check cannot run: %s", exc)
            self._mark_offline(str(exc), retry=False)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("API health check error: %s", exc)
            self._mark_offline(str(exc) or exc.__class__.__name__, retry=True)
        else:
            self._mark_online()
        finally:
            self._inflight = None
        return self.snapshot

    async def wait_for_retries(self) -> None:
        """Wait until no re-check is scheduled."""
        while self._retry_task is not None and not self._retry_task.done():
            task = self._retry_task
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise

    async def aclose(self) -> None:
        self._disposed = True
        tasks = [
            task
            for task in (self._periodic_task, self._retry_task, self._inflight)
            if task is not None and not task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()

        close = getattr(self._probe, "close", None)
        if close is not None:
            await close()

    def _mark_online(self) -> None:
        if self._disposed:
            return
        self._status = HealthStatus.ONLINE
        self._retry_count = 0
        self._last_error = None
        self._last_checked_at = datetime.now(timezone.utc)
        if self._retry_task is not None and not self._retry_task.done():
            self._retry_task.cancel()
        self._retry_task = None
        self._notify()

    def _mark_offline(self, error: str, *, retry: bool) -> None:
        if self._disposed:
            return
        self._status = HealthStatus.OFFLINE
        self._last_error = error
        self._last_checked_at = datetime.now(timezone.utc)
        self._notify()

        pending = self._retry_task is not None and not self._retry_task.done()
        if retry and not pending and self._retry_count < self.max_retries:
            self._retry_task = asyncio.create_task(self._retry_after_delay())

    async def _retry_after_delay(self) -> None:
        await self._sleep(self.retry_delay)
        if self._disposed:
            return
        self._retry_task = None
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Health re-check skipped; a check is already in flight")
            return
        self._retry_count += 1
        logger.info("Retrying health check (%s/%s)", self._retry_count, self.max_retries)
        await self.check_status()

    def _notify(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Health listener failed")
