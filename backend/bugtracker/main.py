# backend/bugtracker/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bugtracker.api.auth_routes import router as auth_router
from bugtracker.api.routes import router as api_router
from bugtracker.core.config import Settings, settings as default_settings
from bugtracker.core.database import make_engine
from bugtracker.core.errors import PersistenceError, TrackerError
from bugtracker.services.directory import Directory
from bugtracker.services.gateway import SnapshotGateway
from bugtracker.services.notifier import EmailNotifier
from bugtracker.services.tracker import Tracker

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # one Directory + Tracker per process; every mutation persists, so shutdown only disposes
        engine = make_engine(settings.database_url)
        gateway = SnapshotGateway(engine)

        directory = Directory(gateway)
        try:
            directory.ensure_bootstrap_admin(settings.admin_username, settings.admin_password)
        except PersistenceError as e:
            logger.warning("Bootstrap administrator not saved: %s", e.detail)

        app.state.settings = settings
        app.state.directory = directory
        app.state.tracker = Tracker(gateway, EmailNotifier())
        logger.info("Bug tracker ready (%s)", settings.app_env)
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title="Bug Tracker API", version="0.1.0", lifespan=lifespan)

    allow_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
