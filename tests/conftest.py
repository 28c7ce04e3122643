from unittest.mock import AsyncMock

import httpx
import pytest

from helpers.mock_store import MockStore, install_mock_store
from survey_engine.interfaces import ResponseCopySender
from survey_server.app import create_app
from survey_server.config import ServerSettings
from survey_server.dependencies import get_db

API_KEY = "valid-key"

SAMPLE_QUESTIONS = [
    {"id": "q1", "type": "text", "label": "Name", "required": True},
    {
        "id": "q2",
        "type": "checkbox",
        "label": "Topics",
        "options": ["A", "B", "C"],
        "required": True,
    },
    {"id": "q3", "type": "radio", "label": "Rating", "options": ["1", "2", "3"]},
]

SAMPLE_PARAMS = [
    {"key": "event", "label": "Event", "visible": True},
    {"key": "venue", "label": "Venue", "visible": False},
]


class RecordingSender(ResponseCopySender):
    """Collects response copies instead of sending them."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send(self, copy):
        if self.fail:
            raise RuntimeError("mail provider unavailable")
        self.sent.append(copy)


@pytest.fixture
def store():
    return MockStore()


@pytest.fixture
def db():
    """AsyncMock standing in for AsyncSession; flush/commit are no-ops."""
    return AsyncMock()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def settings():
    return ServerSettings(
        allowed_origins="https://admin.example.com,https://survey-*.vercel.app",
        data_api_key=API_KEY,
    )


@pytest.fixture
def app(settings, store, sender):
    """FastAPI app wired to the in-memory store.

    The lifespan (engine creation) never runs under ASGITransport, so
    ``get_db`` is overridden with an AsyncMock session.
    """
    application = create_app(settings, mailer=sender)

    async def _mock_db():
        yield AsyncMock()

    application.dependency_overrides[get_db] = _mock_db
    for name in (
        "survey_service",
        "data_entry_service",
        "submission_service",
        "session_provider",
    ):
        install_mock_store(getattr(application.state, name), store)
    return application


@pytest.fixture
def client(app):
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")
