"""Health endpoints: our own health function and the backend monitor state."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from admissions.interfaces.http.deps import get_health_monitor
from admissions.modules.health import HealthMonitor, HealthSnapshot
from admissions.schemas import HealthFunctionResponse, HealthStatusResponse

router = APIRouter()
function_router = APIRouter()


def _to_schema(snapshot: HealthSnapshot) -> HealthStatusResponse:
    return HealthStatusResponse(
        status=snapshot.status,
        retry_count=snapshot.retry_count,
        max_retries=snapshot.max_retries,
        last_checked_at=snapshot.last_checked_at,
        last_error=snapshot.last_error,
        payments_enabled=snapshot.is_online,
    )


@function_router.get("/functions/v1/health", response_model=HealthFunctionResponse, summary="Health function")
async def health_function() -> HealthFunctionResponse:
    return HealthFunctionResponse(status="healthy", timestamp=datetime.now(timezone.utc))


@router.get("", response_model=HealthStatusResponse, summary="Backend availability")
async def health_status(monitor: HealthMonitor = Depends(get_health_monitor)) -> HealthStatusResponse:
    return _to_schema(monitor.snapshot)


@router.post("/check", response_model=HealthStatusResponse, summary="Check backend availability now")
async def run_health_check(monitor: HealthMonitor = Depends(get_health_monitor)) -> HealthStatusResponse:
    snapshot = await monitor.check_status()
    return _to_schema(snapshot)
