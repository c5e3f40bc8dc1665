"""
Test the REST adapter with FastAPI's TestClient.

The app lifespan is not entered (no `with TestClient(...)`), so no settings
are read and no agent is built unless a test installs a service.
"""

import pytest
from fastapi.testclient import TestClient

from adapters.rest.app import app
from adapters.rest.dependencies import get_chat_service, set_chat_service
from application.services.chat_session import ChatSessionService
from domain.exceptions import SessionBusy

from conftest import ScriptedEngine, agent_step, tool_step


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()
    set_chat_service(None)


def _install(service) -> None:
    app.dependency_overrides[get_chat_service] = lambda: service


def test_health_ok_without_initialization(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_ok_with_uninitialized_service(client):
    service = ChatSessionService(engine_factory=lambda: ScriptedEngine([]))
    _install(service)

    response = client.get("/api/health")

    assert response.status_code == 200
    assert not service.initialized


def test_chat_returns_agent_reply(client):
    _install(ChatSessionService(engine_factory=lambda: ScriptedEngine(
        [[tool_step("Balance: 2 SOL"), agent_step("You have "), agent_step("2 SOL.")]]
    )))

    response = client.post("/api/chat", json={"message": "What is my balance?"})

    assert response.status_code == 200
    assert response.json() == {"response": "You have 2 SOL."}


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": None}, {"message": 42}])
def test_chat_requires_message(client, body):
    _install(ChatSessionService(engine_factory=lambda: ScriptedEngine([])))

    response = client.post("/api/chat", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Message is required"}


def test_chat_rejects_non_json_body(client):
    _install(ChatSessionService(engine_factory=lambda: ScriptedEngine([])))

    response = client.post("/api/chat", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"error": "Message is required"}


def test_chat_turn_failure_hides_details(client):
    _install(ChatSessionService(engine_factory=lambda: ScriptedEngine(
        [[RuntimeError("secret RPC credentials leaked")]]
    )))

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_chat_initialization_failure_is_500(client):
    def broken_factory():
        raise ValueError("OPENAI_API_KEY is required")

    _install(ChatSessionService(engine_factory=broken_factory))

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_chat_busy_is_409(client):
    class BusyService:
        async def handle_turn(self, text):
            raise SessionBusy("busy")

    _install(BusyService())

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 409
    assert response.json() == {"error": "Session is busy"}


def test_history_lists_transcript(client):
    service = ChatSessionService(
        engine_factory=lambda: ScriptedEngine([[tool_step("addr", tool_name="get_wallet_address"), agent_step("Here it is")]]),
        thread_id="thread-x",
    )
    _install(service)

    client.post("/api/chat", json={"message": "wallet?"})
    response = client.get("/api/chat/history")

    assert response.status_code == 200
    body = response.json()
    assert body["session_id"] == "thread-x"
    assert body["messages"] == [
        {"role": "user", "content": "wallet?", "tool_name": None},
        {"role": "tool", "content": "addr", "tool_name": "get_wallet_address"},
        {"role": "agent", "content": "Here it is", "tool_name": None},
    ]


def test_history_before_first_turn(client):
    _install(ChatSessionService(engine_factory=lambda: ScriptedEngine([])))

    response = client.get("/api/chat/history")

    assert response.json() == {"session_id": None, "messages": []}
