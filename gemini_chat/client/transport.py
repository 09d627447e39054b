"""HTTP client for the backend chat proxy."""

import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from gemini_chat.client.errors import RemoteError, TransportError, classify_failure
from gemini_chat.core.config import settings
from gemini_chat.models.message import FALLBACK_RESPONSE, Message

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to get response"


@dataclass
class TransportResult:
    text: str | None = None
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatTransport:
    """Sends one conversation turn to ``POST /api/chat``.

    Exactly one request is made per :meth:`send`; failures are returned as
    classified :class:`TransportError` values instead of being raised.
    """

    CHAT_PATH = "/api/chat"

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout
        )

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, message: str, history: Sequence[Message]) -> TransportResult:
        payload = {
            "message": message,
            "history": [m.model_dump(mode="json") for m in history],
        }
        try:
            resp = await self._client.post(f"{self.base_url}{self.CHAT_PATH}", json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Chat request failed: {e!r}")
            return TransportResult(error=RemoteError(GENERIC_FAILURE))

        if resp.is_error:
            message_text = _error_message(resp)
            logger.debug(f"Chat request rejected with {resp.status_code}: {message_text}")
            return TransportResult(error=classify_failure(resp.status_code, message_text))

        try:
            data = resp.json()
        except ValueError:
            return TransportResult(error=RemoteError(GENERIC_FAILURE))

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            text = FALLBACK_RESPONSE
        return TransportResult(text=text)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return GENERIC_FAILURE
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return GENERIC_FAILURE
