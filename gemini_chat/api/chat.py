"""Chat proxy endpoint - forwards one turn plus history to the configured LLM."""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from gemini_chat.core.config import settings
from gemini_chat.models.message import ChatRequest, ChatResponse, ErrorResponse
from gemini_chat.services.llm import get_llm_provider

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def get_provider_factory():
    """Dependency returning the provider factory, overridable in tests."""
    return get_llm_provider


@router.post("")
async def chat(request: Request, provider_factory=Depends(get_provider_factory)):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Invalid request format")

    try:
        body = ChatRequest.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Rejected chat request: {e.error_count()} validation errors")
        return _error(400, "Invalid request", details=json.loads(e.json(include_url=False)))

    if not settings.gemini_api_key:
        return _error(500, "Gemini API key not configured")

    try:
        provider = provider_factory()
        reply = await provider.chat(body.history, body.message)
    except Exception as e:
        logger.error(f"Gemini API error: {e}")
        if "API key" in str(e):
            return _error(401, "Invalid or missing API key")
        return _error(500, "Failed to get response from AI. Please try again.")

    return ChatResponse(response=reply.content)
