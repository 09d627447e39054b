"""Abstract LLM provider interface. All providers must implement this."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from gemini_chat.models.message import Message


@dataclass
class LLMResponse:
    content: str


class BaseLLMProvider(ABC):
    @abstractmethod
    async def chat(self, history: Sequence[Message], message: str) -> LLMResponse:
        """Send the prior history plus the new user message and get one reply."""
        ...
