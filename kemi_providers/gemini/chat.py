"""Multi-turn chat sessions with history rollback.

Example::

    chat = ChatGenerator(get_gemini_settings()).create_session(system_prompt="Be brief.")
    chat.send_message("Hello, who are you?")
    chat.send_message("What did I just ask you?")  # history is sent every turn

History contract
----------------
A send appends the user message, runs the call, and appends the model answer
on success. On any failure, interrupts included, the user message is removed
again and the error re-raised, so history only ever holds completed exchanges
and grows by exactly two messages per successful send. Intermediate fallback
attempts never touch history.

Streaming sends may deliver chunks of attempts that are later retried.

Sessions are not thread-safe; use one per thread or lock externally.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..base.http import Transport
from ..base.logging import normalized_log_event
from ..base.models import ChatMessage, ChatSessionState, ImageData
from ..base.resilience import RotationCursor
from ..base.streaming import ChunkCallback
from ..config import GeminiSettings, get_gemini_settings
from ..config.defaults import GEMINI_DEFAULT_BASE_URL
from .client import GeminiClient
from .payloads import build_chat_request


class ChatSession(GeminiClient):
    """A conversation with its own history and rotation state."""

    def __init__(
        self,
        credentials: Sequence[str],
        models: Sequence[str],
        *,
        base_url: str = GEMINI_DEFAULT_BASE_URL,
        default_prompt: Optional[str] = None,
        system_prompt: Optional[str] = None,
        history: Iterable[ChatMessage] = (),
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(credentials, models, base_url=base_url, transport=transport, logger=logger)
        self._default_prompt = default_prompt
        self._system_prompt = system_prompt
        self._history: List[ChatMessage] = list(history)

    @classmethod
    def from_state(
        cls,
        state: ChatSessionState,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "ChatSession":
        """Rebuild a session from a snapshot; rotation starts from the first pair."""
        return cls(
            state.credentials,
            state.models,
            base_url=state.base_url,
            default_prompt=state.default_prompt,
            system_prompt=state.system_prompt,
            history=state.history,
            transport=transport,
            logger=logger,
        )

    @property
    def default_prompt(self) -> Optional[str]:
        return self._default_prompt

    @property
    def system_prompt(self) -> Optional[str]:
        return self._system_prompt

    @property
    def history(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._history)

    def export_session(self) -> ChatSessionState:
        """Snapshot configuration and history. Rotation state is not included."""
        state = ChatSessionState(
            credentials=self._credentials,
            models=self._models,
            history=tuple(self._history),
            default_prompt=self._default_prompt,
            system_prompt=self._system_prompt,
            base_url=self._base_url,
        )
        return state.model_copy(deep=True)

    def clear_history(self) -> None:
        self._history.clear()
        self._cursor = RotationCursor()

    def send_message(
        self,
        text: str,
        *,
        images: Iterable[ImageData] = (),
        credential: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Send a user turn and return the model's answer.

        With ``credential`` the call is a single attempt using that key against
        ``model``, or the first configured model when omitted. The rotation
        cursor is neither read nor advanced. ``model`` is ignored without
        ``credential``.
        """
        message = ChatMessage.user(text, tuple(images))
        if credential is not None:
            target = model or self._models[0]
            return self._exchange(
                "send_message",
                message,
                lambda: self._generate_answer(target, credential, self._request_body()),
            )
        return self._exchange(
            "send_message",
            message,
            lambda: self._logged_call(
                "send_message",
                lambda m, key: self._generate_answer(m, key, self._request_body()),
            ),
        )

    def send_message_stream(self, text: str, on_chunk: Optional[ChunkCallback] = None) -> str:
        """Streaming variant of :meth:`send_message`."""
        return self._exchange(
            "send_message_stream",
            ChatMessage.user(text),
            lambda: self._logged_call(
                "send_message_stream",
                lambda m, key: self._stream(m, key, self._request_body(), on_chunk),
                event_prefix="stream",
            ),
        )

    def _request_body(self) -> Dict[str, Any]:
        return build_chat_request(self._history, self._default_prompt, self._system_prompt)

    def _exchange(self, operation: str, message: ChatMessage, call: Callable[[], str]) -> str:
        self._history.append(message)
        try:
            answer = call()
        except BaseException as e:
            self._history.pop()
            normalized_log_event(
                self._logger,
                "session.rollback",
                self._log_context(operation, self.current_model),
                phase="finalize",
                error_code=getattr(getattr(e, "code", None), "value", None),
                level=logging.WARNING,
                history_size=len(self._history),
            )
            raise
        self._history.append(ChatMessage.model(answer))
        return answer


class ChatGenerator:
    """Factory for chat sessions sharing one configuration and transport.

    Parameters:
        settings: Resolved settings; loaded with :func:`get_gemini_settings`
            when omitted.
        default_prompt: Overrides ``settings.default_prompt``.
        transport: Transport handed to every session.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        *,
        default_prompt: Optional[str] = None,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings if settings is not None else get_gemini_settings()
        self._default_prompt = default_prompt if default_prompt is not None else self._settings.default_prompt
        self._transport = transport
        self._logger = logger

    @property
    def settings(self) -> GeminiSettings:
        return self._settings

    def create_session(
        self,
        system_prompt: Optional[str] = None,
        credentials: Optional[Sequence[str]] = None,
        models: Optional[Sequence[str]] = None,
    ) -> ChatSession:
        """Start an empty conversation.

        Raises:
            ConfigurationError: when no credential or no model is available.
        """
        return ChatSession(
            credentials if credentials is not None else self._settings.api_keys,
            models if models is not None else self._settings.models,
            base_url=self._settings.base_url,
            default_prompt=self._default_prompt,
            system_prompt=system_prompt,
            transport=self._transport,
            logger=self._logger,
        )

    def restore_session(self, state: ChatSessionState) -> ChatSession:
        return ChatSession.from_state(state, transport=self._transport, logger=self._logger)


__all__ = ["ChatSession", "ChatGenerator"]
