"""Google Gemini LLM provider."""

import logging
from typing import Any, Sequence

from google import genai

from gemini_chat.core.config import settings
from gemini_chat.models.message import FALLBACK_RESPONSE, USER_ROLE, Message
from gemini_chat.services.llm.base import BaseLLMProvider, LLMResponse

logger = logging.getLogger(__name__)


def to_gemini_contents(history: Sequence[Message], message: str) -> list[dict]:
    """Map the conversation log onto Gemini turns, appending the new message last."""
    contents = [
        {"role": "user" if m.role == USER_ROLE else "model", "parts": [{"text": m.content}]}
        for m in history
    ]
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


def extract_text(response: Any) -> str:
    """Pull the generated text out of a Gemini response.

    Tries, in order: the direct ``text`` field (plain value or accessor),
    the first part of the first candidate, then a fixed fallback string.
    """
    text = _field(response, "text")
    if callable(text):
        text = text()
    if isinstance(text, str) and text:
        return text

    candidate = _first(_field(response, "candidates"))
    part = _first(_field(_field(candidate, "content"), "parts"))
    text = _field(part, "text")
    if isinstance(text, str) and text:
        return text

    return FALLBACK_RESPONSE


class GeminiProvider(BaseLLMProvider):
    def __init__(self):
        self.client = genai.Client(api_key=settings.gemini_api_key)
        self.model = settings.gemini_model

    async def chat(self, history: Sequence[Message], message: str) -> LLMResponse:
        contents = to_gemini_contents(history, message)
        logger.debug(f"Gemini request: model={self.model} turns={len(contents)}")
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
        )
        return LLMResponse(content=extract_text(response))
