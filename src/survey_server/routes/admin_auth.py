"""Admin sign-in endpoints — the session provider's request surface.

``POST /login`` sets an httpOnly session cookie, ``POST /logout`` clears
it, ``GET /me`` echoes the signed-in admin (401 otherwise).
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from survey_engine.models.requests import LoginRequest
from survey_engine.models.views import AdminIdentity, MessageResult

from survey_server.auth import CookieSessionProvider
from survey_server.dependencies import get_db, get_session_provider, require_admin

router = APIRouter(prefix="/admin/auth", tags=["admin-auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db, scope="function"),
    provider: CookieSessionProvider = Depends(get_session_provider),
) -> MessageResult:
    """Check credentials and set the session cookie.

    Cookies are ``Secure`` + ``SameSite=None`` over HTTPS (cross-site admin
    UI), ``SameSite=Lax`` otherwise.
    """
    session = await provider.sign_in(db, email=body.email, password=body.password)
    secure = request.url.scheme == "https"
    response.set_cookie(
        provider.cookie_name,
        session.id,
        max_age=provider.max_age_seconds,
        path="/",
        httponly=True,
        secure=secure,
        samesite="none" if secure else "lax",
    )
    return MessageResult(message="Login successful")


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db, scope="function"),
    provider: CookieSessionProvider = Depends(get_session_provider),
) -> MessageResult:
    """Delete the current session (if any) and clear the cookie."""
    await provider.sign_out(db, request)
    response.delete_cookie(provider.cookie_name, path="/")
    return MessageResult(message="Logged out")


@router.get("/me")
async def me(identity: AdminIdentity = Depends(require_admin)) -> AdminIdentity:
    return identity
