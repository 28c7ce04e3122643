"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that owns the database engine and session factory
  - Engine services and the admin session provider on ``app.state``
  - Allowlist CORS middleware
  - Global exception handlers (engine errors -> status + ``{"error": ...}``)
  - The four route families and a ``/health`` endpoint

The ``cli()`` function is the ``survey-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text

from survey_db.engine import build_engine, build_session_factory
from survey_engine.data_entries import DataEntryService
from survey_engine.errors import SurveyError
from survey_engine.interfaces import ResponseCopySender
from survey_engine.mailer import ResendMailer
from survey_engine.submission import SubmissionService
from survey_engine.surveys import SurveyService

from survey_server.auth import CookieSessionProvider
from survey_server.config import ServerSettings, load_settings
from survey_server.cors import AllowlistCORSMiddleware
from survey_server.errors import (
    generic_error_handler,
    request_validation_handler,
    survey_error_handler,
)
from survey_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the database engine for the lifetime of the process.

    Startup builds the engine and session factory and stashes them on
    ``app.state``; shutdown disposes the connection pool.
    """
    engine = build_engine()
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info("Database engine created")

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


def build_mailer(settings: ServerSettings) -> ResponseCopySender | None:
    """Return the Resend mailer, or ``None`` when e-mail is not configured."""
    if not (settings.resend_api_key and settings.mail_from):
        logger.warning("RESEND_API_KEY / RESEND_FROM_EMAIL not set; response copies disabled")
        return None
    return ResendMailer(api_key=settings.resend_api_key, sender=settings.mail_from)


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    *,
    mailer: ResponseCopySender | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application.

    Args:
        settings: server settings (default: read from environment)
        mailer: response-copy sender override (default: built from settings)
    """
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Survey API",
        description="Survey definition and response collection API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # --- Shared state read by dependencies ---
    app.state.settings = settings
    app.state.survey_service = SurveyService()
    app.state.data_entry_service = DataEntryService()
    app.state.submission_service = SubmissionService(
        sender=mailer if mailer is not None else build_mailer(settings),
    )
    app.state.session_provider = CookieSessionProvider(
        cookie_name=settings.session_cookie_name,
        max_age_seconds=settings.session_max_age_seconds,
    )

    # --- CORS ---
    app.add_middleware(
        AllowlistCORSMiddleware,
        allowed_origins=settings.allowed_origins,
    )

    # --- Exception handlers ---
    app.add_exception_handler(SurveyError, survey_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            async with app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn survey_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``survey-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "survey_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
