"""Gemini generators: one-shot questions and multi-turn chat sessions."""

from .client import GeminiClient
from .generator import FallbackGenerator
from .chat import ChatGenerator, ChatSession
from .payloads import build_chat_request, build_question_request

__all__ = [
    "GeminiClient",
    "FallbackGenerator",
    "ChatGenerator",
    "ChatSession",
    "build_chat_request",
    "build_question_request",
]
