"""FastAPI application — main entry point."""

import asyncio
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from courseload.application.services.token_service import TokenService
from courseload.config import Settings, get_settings, validate_runtime_config
from courseload.core.exceptions import register_exception_handlers
from courseload.core.logging import configure_logging
from courseload.core.middleware import setup_middleware
from courseload.infrastructure.database import build_engine, build_session_factory, init_db
from courseload.infrastructure.mailer import Mailer, build_mailer
from courseload.interfaces.api.admin import router as admin_router
from courseload.interfaces.api.auth import router as auth_router
from courseload.interfaces.api.courses import router as courses_router
from courseload.interfaces.api.notifications import router as notifications_router
from courseload.seed.qa_admin import seed_qa_admin

logger = structlog.get_logger(__name__)


def _exit_on_uncaught(exc_type, exc, tb) -> None:
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
    sys.exit(1)


def _exit_on_loop_error(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    logger.critical("Unhandled asynchronous error", error=str(context.get("exception") or context.get("message")))
    # Requires an external supervisor to restart the process
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting course-load service...", env=settings.ENVIRONMENT)

    if app.state.fatal_handlers:
        sys.excepthook = _exit_on_uncaught
        asyncio.get_running_loop().set_exception_handler(_exit_on_loop_error)

    if app.state.engine is None:
        app.state.engine = build_engine(settings.DATABASE_URL)
    try:
        init_db(app.state.engine)
    except SQLAlchemyError as exc:
        logger.critical("Initialization error: database unavailable", error=str(exc))
        raise
    app.state.session_factory = build_session_factory(app.state.engine)
    logger.info("Database tables created/verified")

    if not settings.is_production:
        seed_qa_admin(app.state.session_factory, settings)

    if app.state.mailer is None:
        app.state.mailer = build_mailer(settings)
    if app.state.mailer.verify():
        logger.info("Mail transporter is ready to send emails", backend=settings.MAIL_BACKEND)

    yield

    app.state.mailer.close()
    app.state.engine.dispose()
    logger.info("Course-load service stopped")


def create_app(
    settings: Optional[Settings] = None,
    *,
    engine: Optional[Engine] = None,
    mailer: Optional[Mailer] = None,
    fatal_handlers: bool = False,
) -> FastAPI:
    settings = settings or get_settings()
    validate_runtime_config(settings)
    configure_logging(settings)

    app = FastAPI(
        title="Course-Load Management API",
        description="Lecturer course-load records with QA review and payment approval",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.engine = engine
    app.state.mailer = mailer
    app.state.fatal_handlers = fatal_handlers

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(courses_router)
    app.include_router(notifications_router)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app(fatal_handlers=True)


def run() -> None:
    import uvicorn

    uvicorn.run("courseload.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "12000")))
