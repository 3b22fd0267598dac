"""
Serializable snapshot of a chat session.

A ``ChatSessionState`` holds everything needed to rebuild an equivalent
session: credentials, models, prompts, base URL and the conversation history.
Rotation progress is deliberately absent; a restored session always starts
from the first (model, credential) pair.

Persistence: ``state.model_dump_json()`` / ``ChatSessionState.model_validate_json``.
The JSON contains the API keys in clear text, so store it accordingly.
"""
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .chat_message import ChatMessage


class ChatSessionState(BaseModel):
    """Immutable export of a :class:`~kemi_providers.gemini.chat.ChatSession`."""

    model_config = ConfigDict(frozen=True)

    credentials: Tuple[str, ...] = Field(min_length=1)
    models: Tuple[str, ...] = Field(min_length=1)
    history: Tuple[ChatMessage, ...] = ()
    default_prompt: Optional[str] = None
    system_prompt: Optional[str] = None
    base_url: str


__all__ = ["ChatSessionState"]
