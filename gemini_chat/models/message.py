"""Message and wire models shared by the backend proxy and the session client."""

import time
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
Role = Literal["user", "assistant"]

FALLBACK_RESPONSE = "I apologize, but I couldn't generate a response."


def now_ms() -> int:
    return int(time.time() * 1000)


class Message(BaseModel):
    """A single turn entry in the conversation log. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str = Field(min_length=1)
    timestamp: int = Field(default_factory=now_ms)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    history: list[Message] = Field(default_factory=list)


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str
    details: Any | None = None
