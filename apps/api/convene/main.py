from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from prometheus_fastapi_instrumentator import Instrumentator

from convene.api.v1.router import router as v1_router
from convene.core.config import settings
from convene.core.logging import configure_logging
from convene.db import StoreSession, open_session
from convene.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


def create_app(db: StoreSession | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = db or open_session()
        # Rehydrate before the first request is served.
        report = session.load()
        if not report.ok:
            logger.error("startup_load_failed", error=report.error)
        app.state.db = session
        yield
        result = session.save()
        if not result.ok:
            logger.error("shutdown_save_failed", error=result.error)

    app = FastAPI(title="Convene API", lifespan=lifespan)
    app.add_middleware(RequestIdMiddleware)

    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    @app.get("/")
    def root():
        return {"name": "Convene API", "status": "ok"}

    @app.get("/health")
    def health(request: Request):
        session: StoreSession = request.app.state.db
        last_save = session.last_save
        return {
            "status": "ok" if last_save is None or last_save.ok else "degraded",
            "events": session.store.count_total(),
            "last_save_ok": None if last_save is None else last_save.ok,
        }

    app.include_router(v1_router, prefix="/v1")
    return app


configure_logging()

app = create_app()
