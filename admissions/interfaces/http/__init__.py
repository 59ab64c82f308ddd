from fastapi import APIRouter

from admissions.interfaces.http.routers import applications, health, payments


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(health.router, prefix="/health", tags=["health"])
    router.include_router(applications.router, prefix="/applications", tags=["applications"])
    router.include_router(payments.router, prefix="/payments", tags=["payments"])
    return router


__all__ = [
    "create_api_router",
]
