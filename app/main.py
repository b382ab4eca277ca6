from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.showroom.api import build_api_router
from app.showroom.core.config import Settings, settings as default_settings
from app.showroom.core.errors import setup_exception_handlers
from app.showroom.core.logging import configure_logging
from app.showroom.db.session import Database
from app.showroom.middleware.observability import ObservabilityMiddleware
from app.showroom.middleware.tenant import TenantContextMiddleware
from app.showroom.middleware.trace import TraceIdMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging()
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO).connect()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            database.close()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(TenantContextMiddleware)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(build_api_router(settings))
    return app


app = create_app()
