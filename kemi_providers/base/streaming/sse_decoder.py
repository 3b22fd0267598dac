"""Server-sent-event decoder for ``streamGenerateContent?alt=sse`` bodies.

Purpose:
- Turn a line-oriented SSE body into text deltas, hand each delta to the
  caller's callback in arrival order and return the accumulated text.

Behavior:
- Only ``data:`` lines are considered; the prefix and surrounding whitespace
  are stripped. Other lines (comments, ``event:`` fields, garbage) are ignored.
- Empty payloads and the ``[DONE]`` sentinel are skipped. The sentinel is
  optional: the stream ends when the line iterator is exhausted.
- A payload that fails to parse is logged as ``stream.decode_error`` at debug
  level and skipped. Malformed chunks never abort the stream.
- Exceptions raised by the line iterator itself (transport failures) and by
  the callback propagate unchanged.

The decoder keeps no state between calls; one instance may be reused.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Union

from ..dto.gemini_wire import GenerateContentChunk
from ..logging import LogContext, get_logger, normalized_log_event

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"

ChunkParser = Callable[[str], Optional[str]]
ChunkCallback = Callable[[str], None]


def parse_gemini_chunk(payload: str) -> Optional[str]:
    """Return the text delta carried by one ``data:`` payload."""
    return GenerateContentChunk.model_validate_json(payload).delta


def _payload_of(line: Union[str, bytes]) -> Optional[str]:
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):].strip()
    if not payload or payload == DONE_SENTINEL:
        return None
    return payload


class StreamDecoder:
    """Decode SSE lines into text chunks.

    Parameters:
        parser: Maps a payload string to its text delta. Defaults to
            :func:`parse_gemini_chunk`.
        logger: Logger for decode errors.
        ctx: Log context attached to decode error events.
    """

    def __init__(
        self,
        parser: ChunkParser = parse_gemini_chunk,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._parser = parser
        self._logger = logger or get_logger("streaming")
        self._ctx = ctx

    def iter_chunks(self, lines: Iterable[Union[str, bytes]]) -> Iterator[str]:
        """Yield every non-empty text delta found in ``lines``."""
        for index, line in enumerate(lines):
            payload = _payload_of(line)
            if payload is None:
                continue
            try:
                text = self._parser(payload)
            except (ValueError, TypeError, KeyError, AttributeError) as exc:
                normalized_log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    phase="mid_stream",
                    level=logging.DEBUG,
                    error=str(exc),
                    line_no=index,
                )
                continue
            if text:
                yield text

    def decode(self, lines: Iterable[Union[str, bytes]], on_chunk: Optional[ChunkCallback] = None) -> str:
        """Feed every delta to ``on_chunk`` and return their concatenation."""
        collected: List[str] = []
        for text in self.iter_chunks(lines):
            if on_chunk is not None:
                on_chunk(text)
            collected.append(text)
        return "".join(collected)


__all__ = [
    "StreamDecoder",
    "ChunkParser",
    "ChunkCallback",
    "parse_gemini_chunk",
    "DATA_PREFIX",
    "DONE_SENTINEL",
]
