"""Admin session auth — the session provider behind ``/admin`` routes.

A ``SessionProvider`` resolves an incoming request to the signed-in admin
or ``None``.  Callers must not care *why* it is ``None`` (no cookie, unknown
id, expired row): every case becomes the same 401.

``CookieSessionProvider`` is the built-in implementation: the cookie holds
the id of an ``admin_sessions`` row, created by ``sign_in`` after a scrypt
password check and removed by ``sign_out``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.survey import AdminSession
from survey_db.repository import AdminRepository
from survey_engine.errors import UnauthorizedError
from survey_engine.models.views import AdminIdentity
from survey_engine.passwords import verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class SessionProvider(ABC):
    """Interface for resolving admin sessions from requests."""

    @abstractmethod
    async def get_session(
        self, db: AsyncSession, request: Request
    ) -> AdminIdentity | None:
        """Return the signed-in admin, or ``None`` for any failure."""
        ...


class CookieSessionProvider(SessionProvider):
    """Database-backed sessions referenced by an httpOnly cookie.

    Args:
        cookie_name: name of the session cookie
        max_age_seconds: lifetime of newly created sessions
    """

    def __init__(self, cookie_name: str = "session", max_age_seconds: int = 604_800) -> None:
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self._repo = AdminRepository()

    async def get_session(
        self, db: AsyncSession, request: Request
    ) -> AdminIdentity | None:
        session_id = request.cookies.get(self.cookie_name)
        if not session_id:
            return None
        session = await self._repo.get_session(db, session_id)
        if session is None or session.expires_at < datetime.now(timezone.utc):
            return None
        return AdminIdentity(id=session.user.id, email=session.user.email)

    async def sign_in(
        self, db: AsyncSession, *, email: str, password: str
    ) -> AdminSession:
        """Verify credentials and open a new session.

        Unknown e-mail and wrong password raise the same error.
        """
        user = await self._repo.get_user_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed admin login for %s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=self.max_age_seconds)
        session = await self._repo.create_session(db, user, expires_at=expires_at)
        logger.info("Admin %s signed in", user.id)
        return session

    async def sign_out(self, db: AsyncSession, request: Request) -> None:
        """Drop the session named by the request cookie, if any."""
        session_id = request.cookies.get(self.cookie_name)
        if session_id:
            await self._repo.delete_session(db, session_id)
