from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admissions import __version__
from admissions.core.config import get_settings
from admissions.core.container import get_container
from admissions.core.logging import configure_logging
from admissions.infrastructure.database import dispose_engine, init_db
from admissions.interfaces.http import create_api_router
from admissions.interfaces.http.routers import health as health_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    await init_db()
    container = get_container()
    await container.startup()
    try:
        yield
    finally:
        await container.shutdown()
        get_container.cache_clear()
        await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Payment and application orchestration for the admissions site",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(health_router.function_router, tags=["health"])
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "admissions.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )
