"""Admin session tests — login/logout/me and the uniform 401 on /admin."""

from datetime import datetime, timedelta, timezone

import pytest

from helpers.mock_store import MockAdminSession, MockAdminUser
from survey_engine.passwords import hash_password

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def admin(store):
    user = MockAdminUser(email=ADMIN_EMAIL, password_hash=hash_password(ADMIN_PASSWORD))
    store.users[ADMIN_EMAIL] = user
    return user


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_sets_http_only_cookie(self, client, admin, store):
        async with client:
            response = await client.post(
                "/admin/auth/login",
                json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            )
        assert response.status_code == 200
        assert response.json() == {"message": "Login successful"}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("session=")
        assert "HttpOnly" in set_cookie
        assert len(store.sessions) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password",
        [(ADMIN_EMAIL, "wrong"), ("nobody@example.com", ADMIN_PASSWORD)],
    )
    async def test_bad_credentials_uniform(self, client, admin, email, password):
        async with client:
            response = await client.post(
                "/admin/auth/login", json={"email": email, "password": password},
            )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    @pytest.mark.asyncio
    async def test_me_after_login(self, client, admin):
        async with client:
            await client.post(
                "/admin/auth/login",
                json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            )
            response = await client.get("/admin/auth/me")
        assert response.status_code == 200
        assert response.json() == {"id": admin.id, "email": ADMIN_EMAIL}

    @pytest.mark.asyncio
    async def test_logout_ends_session(self, client, admin, store):
        async with client:
            await client.post(
                "/admin/auth/login",
                json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            )
            response = await client.post("/admin/auth/logout")
            assert response.status_code == 200
            assert store.sessions == {}
            response = await client.get("/admin/surveys")
        assert response.status_code == 401


class TestUniformUnauthorized:
    @pytest.mark.asyncio
    async def test_no_cookie(self, client):
        async with client:
            response = await client.get("/admin/surveys")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        client.cookies.set("session", "does-not-exist")
        async with client:
            response = await client.get("/admin/surveys")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_expired_session(self, client, admin, store):
        expired = MockAdminSession(
            user=admin, expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
        store.sessions[expired.id] = expired
        client.cookies.set("session", expired.id)
        async with client:
            response = await client.get("/admin/surveys")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_valid_session(self, client, admin, store):
        live = MockAdminSession(
            user=admin, expires_at=datetime.now(timezone.utc) + timedelta(days=1),
        )
        store.sessions[live.id] = live
        client.cookies.set("session", live.id)
        async with client:
            response = await client.get("/admin/surveys")
        assert response.status_code == 200
