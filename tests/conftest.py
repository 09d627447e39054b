"""Shared test fixtures."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from gemini_chat.api.chat import get_provider_factory
from gemini_chat.client.scroll import ScrollMetrics, Viewport
from gemini_chat.client.storage import HistoryStore, MemoryBlobStore
from gemini_chat.client.transport import TransportResult
from gemini_chat.services.llm.base import LLMResponse


@pytest.fixture
def mock_provider():
    """Mock LLM provider that answers every turn with a fixed reply."""
    provider = AsyncMock()
    provider.chat.return_value = LLMResponse(content="Hi there")
    return provider


@pytest.fixture
def client(mock_provider):
    """FastAPI TestClient with the LLM provider and API key patched."""
    with patch("gemini_chat.core.config.settings.gemini_api_key", "test-key"):
        from gemini_chat.main import app

        app.dependency_overrides[get_provider_factory] = lambda: (lambda: mock_provider)

        with TestClient(app) as c:
            yield c

        app.dependency_overrides.clear()


class FakeTransport:
    """Records calls and answers with queued results."""

    def __init__(self, *results: TransportResult):
        self.results = list(results)
        self.calls: list[tuple[str, list]] = []

    async def send(self, message, history):
        self.calls.append((message, list(history)))
        return self.results.pop(0)


class FakeViewport(Viewport):
    def __init__(self, scroll_top=0, scroll_height=0, client_height=0):
        self.scroll_top = scroll_top
        self.scroll_height = scroll_height
        self.client_height = client_height
        self.scrolls: list[bool] = []

    def metrics(self) -> ScrollMetrics:
        return ScrollMetrics(self.scroll_top, self.scroll_height, self.client_height)

    def scroll_to_end(self, smooth: bool = True) -> None:
        self.scrolls.append(smooth)
        self.scroll_top = max(self.scroll_height - self.client_height, 0)


@pytest.fixture
def blobs():
    return MemoryBlobStore()


@pytest.fixture
def history_store(blobs):
    return HistoryStore(blobs, key="gemini-chat-history")
