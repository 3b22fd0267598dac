"""One-shot Gemini generator with credential/model fallback.

Example::

    settings = get_gemini_settings()
    generator = FallbackGenerator(settings)
    answer = generator.ask("What is the capital of France?")

Every public operation runs through the shared fallback loop: a transport
error or a response without candidate text moves the cursor to the next
(model, credential) pair, credentials first, and the call is retried until a
pair succeeds or every pair has failed (:class:`FallbackExhausted`).

Streaming note: ``on_chunk`` receives chunks as they arrive, including chunks
of an attempt that later fails and is retried against another pair. Callers
rendering chunks live must tolerate a restart.

Instances are not thread-safe; use one per thread or lock externally.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..base.dto.gemini_wire import GenerateContentResponse
from ..base.errors import StructuredDecodeError
from ..base.http import Transport
from ..base.models import ImageData
from ..base.logging import normalized_log_event
from ..base.streaming import ChunkCallback
from ..base.structured import Decoder, SchemaDescriptor, StructuredOutputPromptBuilder, decode_structured
from ..config import GeminiSettings, get_gemini_settings
from .client import GeminiClient
from .payloads import build_question_request


class FallbackGenerator(GeminiClient):
    """Stateless-question generator over a rotating (model, credential) pool.

    Parameters:
        settings: Resolved settings; loaded with :func:`get_gemini_settings`
            when omitted.
        credentials: Overrides ``settings.api_keys``.
        models: Overrides ``settings.models``.
        base_url: Overrides ``settings.base_url``.
        default_prompt: Overrides ``settings.default_prompt``; sent as the
            first system instruction part of every request.
        transport: Blocking HTTP transport.
        prompt_builder: Builds structured-output prompts.
        logger: Logger for lifecycle events.

    Raises:
        ConfigurationError: when no credential or no model remains.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        *,
        credentials: Optional[Iterable[str]] = None,
        models: Optional[Iterable[str]] = None,
        base_url: Optional[str] = None,
        default_prompt: Optional[str] = None,
        transport: Optional[Transport] = None,
        prompt_builder: Optional[StructuredOutputPromptBuilder] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        settings = settings if settings is not None else get_gemini_settings()
        super().__init__(
            tuple(credentials) if credentials is not None else settings.api_keys,
            tuple(models) if models is not None else settings.models,
            base_url=base_url or settings.base_url,
            transport=transport,
            logger=logger,
        )
        self._default_prompt = default_prompt if default_prompt is not None else settings.default_prompt
        self._prompt_builder = prompt_builder or StructuredOutputPromptBuilder()

    @property
    def default_prompt(self) -> Optional[str]:
        return self._default_prompt

    def direct_ask(
        self,
        question: str,
        model: str,
        prompt: Optional[str] = None,
        credential: Optional[str] = None,
    ) -> GenerateContentResponse:
        """Single attempt against ``model``; no rotation, cursor untouched.

        ``credential`` defaults to the current credential. Errors propagate.
        """
        body = build_question_request(question, self._default_prompt, prompt)
        return self._generate(model, credential or self.current_credential, body)

    def ask(self, question: str, prompt: Optional[str] = None) -> str:
        body = build_question_request(question, self._default_prompt, prompt)
        return self._logged_call("ask", lambda model, key: self._generate_answer(model, key, body))

    def ask_with_images(self, question: str, images: Iterable[ImageData], prompt: Optional[str] = None) -> str:
        """Ask about one or more images; parts are the question then each image."""
        body = build_question_request(question, self._default_prompt, prompt, images=tuple(images))
        return self._logged_call("ask_with_images", lambda model, key: self._generate_answer(model, key, body))

    def ask_stream(
        self,
        question: str,
        prompt: Optional[str] = None,
        on_chunk: Optional[ChunkCallback] = None,
    ) -> str:
        """Stream the answer, feeding each text delta to ``on_chunk``.

        Returns the concatenated text of the successful attempt.
        """
        body = build_question_request(question, self._default_prompt, prompt)
        return self._logged_call(
            "ask_stream",
            lambda model, key: self._stream(model, key, body, on_chunk),
            event_prefix="stream",
        )

    def ask_structured(
        self,
        question: str,
        schema: SchemaDescriptor,
        prompt: Optional[str] = None,
        decoder: Optional[Decoder] = None,
    ) -> Any:
        """Ask for a JSON answer described by ``schema`` and decode it.

        Raises:
            StructuredDecodeError: when the answer cannot be decoded. Not retried.
        """
        text = self.ask(self._prompt_builder.build_prompt(question, schema), prompt)
        try:
            return decode_structured(text, schema, decoder)
        except StructuredDecodeError as e:
            normalized_log_event(
                self._logger,
                "structured.decode_error",
                self._log_context("ask_structured", self.current_model),
                phase="finalize",
                error_code=e.code.value,
                level=logging.WARNING,
                error=e.message,
            )
            raise


__all__ = ["FallbackGenerator"]
