"""Tests for the chat proxy endpoint."""

from unittest.mock import patch

HISTORY = [
    {"id": "a1", "role": "user", "content": "Hello", "timestamp": 1700000000000},
    {"id": "b2", "role": "assistant", "content": "Hi there", "timestamp": 1700000001000},
]


def test_chat_returns_response(client, mock_provider):
    response = client.post("/api/chat", json={"message": "Hello", "history": []})
    assert response.status_code == 200
    assert response.json() == {"response": "Hi there"}


def test_chat_passes_history_and_message(client, mock_provider):
    client.post("/api/chat", json={"message": "How are you?", "history": HISTORY})

    history, message = mock_provider.chat.call_args.args
    assert message == "How are you?"
    assert [m.role for m in history] == ["user", "assistant"]
    assert [m.content for m in history] == ["Hello", "Hi there"]


def test_chat_history_is_optional(client, mock_provider):
    response = client.post("/api/chat", json={"message": "Hello"})
    assert response.status_code == 200
    history, _ = mock_provider.chat.call_args.args
    assert history == []


def test_chat_empty_message_rejected(client, mock_provider):
    response = client.post("/api/chat", json={"message": "", "history": []})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid request"
    assert data["details"]
    mock_provider.chat.assert_not_called()


def test_chat_bad_role_rejected(client):
    bad = [{"id": "x", "role": "system", "content": "hi", "timestamp": 1}]
    response = client.post("/api/chat", json={"message": "Hello", "history": bad})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_chat_malformed_json_rejected(client):
    response = client.post(
        "/api/chat", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request format"}


def test_chat_missing_api_key(client, mock_provider):
    with patch("gemini_chat.core.config.settings.gemini_api_key", ""):
        response = client.post("/api/chat", json={"message": "Hello", "history": []})
    assert response.status_code == 500
    assert response.json() == {"error": "Gemini API key not configured"}
    mock_provider.chat.assert_not_called()


def test_chat_rejected_api_key(client, mock_provider):
    mock_provider.chat.side_effect = RuntimeError("API key not valid. Please pass a valid API key.")
    response = client.post("/api/chat", json={"message": "Hello", "history": []})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or missing API key"}


def test_chat_remote_failure(client, mock_provider):
    mock_provider.chat.side_effect = RuntimeError("503 UNAVAILABLE")
    response = client.post("/api/chat", json={"message": "Hello", "history": []})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get response from AI. Please try again."}
