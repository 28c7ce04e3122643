"""Tests for X-API-Key authentication on the /data API."""

import httpx
import pytest

from conftest import API_KEY
from survey_server.app import create_app
from survey_server.config import ServerSettings
from survey_server.dependencies import api_key_matches


class TestApiKeyMatches:
    def test_equal(self):
        assert api_key_matches("valid-key", "valid-key") is True

    def test_different_length(self):
        assert api_key_matches("valid-key-2", "valid-key") is False

    def test_same_length_mismatch(self):
        assert api_key_matches("valid-kez", "valid-key") is False

    def test_non_ascii(self):
        assert api_key_matches("キー", "キー") is True


class TestRequireApiKey:
    @pytest.mark.asyncio
    async def test_missing_header(self, client):
        async with client:
            response = await client.get("/data/surveys")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_wrong_key(self, client):
        async with client:
            response = await client.get("/data/surveys", headers={"X-API-Key": "wrong"})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_valid_key(self, client):
        async with client:
            response = await client.get("/data/surveys", headers={"X-API-Key": API_KEY})
        assert response.status_code == 200
        assert response.json() == {"surveys": []}

    @pytest.mark.asyncio
    async def test_unconfigured_key_is_server_error(self):
        app = create_app(ServerSettings(data_api_key=None))
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/data/surveys", headers={"X-API-Key": "anything"})
        assert response.status_code == 500
        assert response.json() == {"error": "API key not configured"}
