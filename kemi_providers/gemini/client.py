"""Gemini call primitives shared by the generator and chat sessions.

:class:`GeminiClient` adds the Gemini HTTP surface to
:class:`~kemi_providers.base.resilience.RotatingClient`: URL construction for
the current pair, a blocking ``generateContent`` POST parsed into
:class:`GenerateContentResponse`, and a ``streamGenerateContent`` call decoded
by :class:`StreamDecoder`. Subclasses compose these into attempts and run
them through the fallback loop.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from ..base.dto.gemini_wire import GenerateContentResponse
from ..base.errors import MalformedResponseError
from ..base.http import HttpxTransport, Transport
from ..base.logging import get_logger, mask_url, normalized_log_event
from ..base.resilience import RotatingClient
from ..base.streaming import ChunkCallback, StreamDecoder
from ..config import generate_content_url, stream_generate_content_url
from ..config.defaults import GEMINI_DEFAULT_BASE_URL


class GeminiClient(RotatingClient):
    """Rotation state plus the two Gemini calls.

    Parameters:
        credentials: Ordered API keys; must not be empty.
        models: Ordered model identifiers; must not be empty.
        base_url: API root, without the version segment.
        transport: Blocking HTTP transport; defaults to :class:`HttpxTransport`.
        logger: Logger for lifecycle events.
    """

    def __init__(
        self,
        credentials: Sequence[str],
        models: Sequence[str],
        *,
        base_url: str = GEMINI_DEFAULT_BASE_URL,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(credentials, models, logger=logger or get_logger("gemini"))
        self._base_url = base_url
        self._transport: Transport = transport or HttpxTransport()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    def _generate(self, model: str, credential: str, body: Dict[str, Any]) -> GenerateContentResponse:
        url = generate_content_url(self._base_url, model, credential)
        normalized_log_event(
            self._logger,
            "chat.request",
            self._log_context("generate", model, credential),
            phase="attempt",
            level=logging.DEBUG,
            url=mask_url(url),
        )
        data = self._transport.post_json(url, body)
        try:
            return GenerateContentResponse.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(f"unexpected response shape: {exc}", model=model) from exc

    def _generate_answer(self, model: str, credential: str, body: Dict[str, Any]) -> str:
        """POST ``body`` and return the first candidate's text.

        Raises:
            MalformedResponseError: when the response carries no candidate text.
        """
        answer = self._generate(model, credential, body).answer
        if answer is None:
            raise MalformedResponseError("response has no candidate text", model=model)
        return answer

    def _stream(
        self,
        model: str,
        credential: str,
        body: Dict[str, Any],
        on_chunk: Optional[ChunkCallback] = None,
    ) -> str:
        url = stream_generate_content_url(self._base_url, model, credential)
        ctx = self._log_context("stream", model, credential)
        normalized_log_event(
            self._logger,
            "stream.request",
            ctx,
            phase="attempt",
            level=logging.DEBUG,
            url=mask_url(url),
        )
        decoder = StreamDecoder(logger=self._logger, ctx=ctx)
        with closing(self._transport.stream_lines(url, body)) as lines:
            return decoder.decode(lines, on_chunk)


__all__ = ["GeminiClient"]
