"""HTTP Error Handlers: tests for the REST error envelope and the socket fallback frame.

Tests cover:
    - ChatbotError → its http_status and structured body
    - Unexpected exception → 500 INTERNAL_ERROR without exception text
    - Unexpected exception during a socket turn → generic error frame, connection kept
"""

import pytest
from fastapi.testclient import TestClient

from chatbot.config import Settings
from chatbot.main import create_app

from tests.fakes import FakeBackend, FakeGenerator


class _BrokenStore:
    def __init__(self, store):
        self._store = store

    def __getattr__(self, name):
        return getattr(self._store, name)

    def __len__(self):
        return len(self._store)

    def get(self, session_id):
        raise RuntimeError("store corrupted: secret detail")


@pytest.fixture
def fake_backend():
    return FakeBackend(questions=["Should X?"])


@pytest.fixture
def client(fake_backend):
    app = create_app(
        Settings(log_format="text"),
        generator=FakeGenerator(reply="ok"),
        backend=fake_backend,
    )
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def test_chatbot_error_uses_its_status_and_envelope(client):
    response = client.get("/api/v1/sessions/missing")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "SESSION_NOT_FOUND"
    assert error["category"] == "resource_not_found"
    assert error["context"]["session_id"] == "missing"


def test_unexpected_error_is_500_without_details(client):
    client.app.state.sessions = _BrokenStore(client.app.state.sessions)

    response = client.get("/api/v1/sessions/anything")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["category"] == "internal"
    assert error["message"] == "Internal server error"
    assert "secret detail" not in response.text


def test_unexpected_error_in_turn_sends_generic_frame(client, fake_backend, monkeypatch):
    async def explode(project_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(fake_backend, "get_project_questions", explode)
    with client.websocket_connect("/project/p1/chat") as ws:
        ws.send_json({"type": "message", "content": "questions"})
        assert ws.receive_json() == {"error": "Internal server error"}
        monkeypatch.undo()
        ws.send_json({"type": "message", "content": "questions"})
        assert ws.receive_json()["message"]["content"] == "論点一覧:\n1. Should X?"
