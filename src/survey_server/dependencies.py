"""FastAPI dependency injection — DB sessions, services, and both auth schemes.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``.  The session is committed on success and rolled back on
error; engine services and repositories only ever ``flush()``.

Long-lived objects (session factory, services, session provider) are built
by the app lifespan and read from ``app.state`` here.
"""

import hmac
from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from survey_engine.data_entries import DataEntryService
from survey_engine.errors import MisconfigurationError, UnauthorizedError
from survey_engine.models.views import AdminIdentity
from survey_engine.submission import SubmissionService
from survey_engine.surveys import SurveyService

from survey_server.auth import SessionProvider


# ------------------------------------------------------------------
# Database session — transaction boundary lives here
# ------------------------------------------------------------------

async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error.

    Always requested with ``scope="function"`` so the commit finishes before
    the response (and any background task attached to it) goes out.
    """
    factory = request.app.state.session_factory
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ------------------------------------------------------------------
# Services — stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_survey_service(request: Request) -> SurveyService:
    return request.app.state.survey_service


def get_data_entry_service(request: Request) -> DataEntryService:
    return request.app.state.data_entry_service


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_session_provider(request: Request) -> SessionProvider:
    return request.app.state.session_provider


# ------------------------------------------------------------------
# Admin session auth
# ------------------------------------------------------------------

async def require_admin(
    request: Request,
    db: AsyncSession = Depends(get_db, scope="function"),
    provider: SessionProvider = Depends(get_session_provider),
) -> AdminIdentity:
    """Resolve the signed-in admin or reject with a uniform 401.

    The identity is also attached to ``request.state.user``.
    """
    identity = await provider.get_session(db, request)
    if identity is None:
        raise UnauthorizedError()
    request.state.user = identity
    return identity


# ------------------------------------------------------------------
# Machine API-key auth
# ------------------------------------------------------------------

def api_key_matches(provided: str, expected: str) -> bool:
    """Constant-time key comparison; different lengths never match."""
    provided_bytes = provided.encode("utf-8")
    expected_bytes = expected.encode("utf-8")
    if len(provided_bytes) != len(expected_bytes):
        return False
    return hmac.compare_digest(provided_bytes, expected_bytes)


async def require_api_key(
    request: Request,
    x_api_key: str | None = Header(None, alias="X-API-Key"),
) -> None:
    """Validate ``X-API-Key`` against the configured data API key.

    An unconfigured key is a deployment error (500), checked before the
    caller's header so a misconfigured server never looks like a bad key.
    """
    expected: str | None = request.app.state.settings.data_api_key
    if not expected:
        raise MisconfigurationError("API key not configured")
    if not x_api_key or not api_key_matches(x_api_key, expected):
        raise UnauthorizedError()
