"""Behavioral tests for ChatSession history management.

Covers:
- History grows by exactly two messages per successful send (USER, MODEL).
- Total failure leaves history exactly as it was.
- The explicit-credential path never reads or moves the cursor and rolls back.
- Interrupts roll back too, and abandoned streams are closed.
- Export / restore round trips and zeroes rotation state.
"""
from __future__ import annotations

import json
import logging

import pytest

from kemi_providers.base.errors import ConfigurationError, FallbackExhausted, TransportError
from kemi_providers.base.models import ChatMessage, ChatSessionState, ImageData, Role
from kemi_providers.base.resilience import RotationCursor
from kemi_providers.gemini import ChatGenerator, ChatSession


def _sse(text: str) -> str:
    return "data: " + json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture()
def generator(settings):
    return ChatGenerator(settings, default_prompt="Be kind.")


def test_successful_send_appends_user_then_model(settings, make_transport, answer):
    transport = make_transport([answer("Hello!"), answer("You said hi.")])
    session = ChatGenerator(settings, transport=transport).create_session(system_prompt="Be brief.")

    assert session.send_message("Hi") == "Hello!"  # nosec B101
    assert len(session.history) == 2  # nosec B101
    assert [m.role for m in session.history] == [Role.USER, Role.MODEL]  # nosec B101

    session.send_message("What did I say?")
    assert len(session.history) == 4  # nosec B101
    body = transport.calls[1]["body"]
    assert [c["role"] for c in body["contents"]] == ["user", "model", "user"]  # nosec B101
    assert body["contents"][1]["parts"] == [{"text": "Hello!"}]  # nosec B101
    assert body["systemInstruction"] == {"parts": [{"text": "Be brief."}]}  # nosec B101


def test_system_instruction_omitted_without_prompts(settings, make_transport, answer):
    transport = make_transport([answer("ok")])
    session = ChatGenerator(settings, transport=transport).create_session()
    session.send_message("Hi")
    assert "systemInstruction" not in transport.calls[0]["body"]  # nosec B101


def test_intermediate_failures_do_not_touch_history(settings, make_transport, answer):
    transport = make_transport([TransportError("busy"), TransportError("busy"), answer("finally")])
    session = ChatGenerator(settings, transport=transport).create_session()

    assert session.send_message("Hi") == "finally"  # nosec B101
    assert len(session.history) == 2  # nosec B101
    # Every attempt carried exactly the one pending user message.
    assert all(len(c["body"]["contents"]) == 1 for c in transport.calls)  # nosec B101
    assert session.cursor == RotationCursor()  # nosec B101


def test_total_failure_rolls_back_history(settings, make_transport, answer, caplog):
    transport = make_transport([answer("first")] + [TransportError("down")] * 4)
    session = ChatGenerator(settings, transport=transport).create_session()
    session.send_message("one")
    before = session.history

    with caplog.at_level(logging.INFO, logger="kemi"):
        with pytest.raises(FallbackExhausted):
            session.send_message("two")
    assert session.history == before  # nosec B101
    assert len(transport.calls) == 1 + 4  # nosec B101
    assert "session.rollback" in caplog.text  # nosec B101


def test_stream_send_appends_accumulated_answer(settings, make_transport):
    transport = make_transport(stream_outcomes=[[_sse("Hel"), _sse("lo")]])
    session = ChatGenerator(settings, transport=transport).create_session()
    chunks = []

    assert session.send_message_stream("Hi", chunks.append) == "Hello"  # nosec B101
    assert chunks == ["Hel", "lo"]  # nosec B101
    assert session.history[-1] == ChatMessage.model("Hello")  # nosec B101
    assert "streamGenerateContent" in transport.urls[0]  # nosec B101


def test_stream_send_rolls_back_on_exhaustion(settings, make_transport):
    transport = make_transport(stream_outcomes=[TransportError("down")] * 4)
    session = ChatGenerator(settings, transport=transport).create_session()
    with pytest.raises(FallbackExhausted):
        session.send_message_stream("Hi", lambda _chunk: None)
    assert session.history == ()  # nosec B101


def test_callback_error_rolls_back_and_propagates(settings, make_transport):
    transport = make_transport(stream_outcomes=[[_sse("x")]])
    session = ChatGenerator(settings, transport=transport).create_session()

    def explode(_chunk):
        raise RuntimeError("render failed")

    with pytest.raises(RuntimeError):
        session.send_message_stream("Hi", explode)
    assert session.history == ()  # nosec B101


def test_explicit_credential_skips_rotation(settings, make_transport, answer):
    transport = make_transport([answer("direct")])
    session = ChatGenerator(settings, transport=transport).create_session()
    session._cursor = RotationCursor(model_index=1, credential_index=1, attempt_count=3)

    assert session.send_message("Hi", credential="my-own-key-77") == "direct"  # nosec B101
    assert transport.urls == [  # nosec B101
        "https://gemini.test/v1beta/models/model-a:generateContent?key=my-own-key-77"
    ]
    assert session.cursor == RotationCursor(model_index=1, credential_index=1, attempt_count=3)  # nosec B101
    assert len(session.history) == 2  # nosec B101


def test_explicit_credential_failure_rolls_back_without_retry(settings, make_transport, answer):
    transport = make_transport([TransportError("bad key"), answer("unused")])
    session = ChatGenerator(settings, transport=transport).create_session()

    with pytest.raises(TransportError):
        session.send_message("Hi", credential="my-own-key-77")
    assert session.history == ()  # nosec B101
    assert len(transport.calls) == 1  # nosec B101
    assert session.cursor == RotationCursor()  # nosec B101


def test_explicit_credential_targets_requested_model(settings, make_transport, answer):
    transport = make_transport([answer("direct")])
    session = ChatGenerator(settings, transport=transport).create_session()

    session.send_message("Hi", credential="my-own-key-77", model="model-b")
    assert transport.urls == [  # nosec B101
        "https://gemini.test/v1beta/models/model-b:generateContent?key=my-own-key-77"
    ]
    assert session.cursor == RotationCursor()  # nosec B101


def test_credential_cannot_be_passed_positionally(settings, make_transport, answer):
    transport = make_transport([answer("unused")])
    session = ChatGenerator(settings, transport=transport).create_session()

    with pytest.raises(TypeError):
        session.send_message("Hi", "my-own-key-77")
    assert transport.calls == []  # nosec B101
    assert session.history == ()  # nosec B101


def test_interrupt_during_blocking_send_rolls_back(settings, make_transport, answer):
    transport = make_transport([KeyboardInterrupt(), answer("later")])
    session = ChatGenerator(settings, transport=transport).create_session()

    with pytest.raises(KeyboardInterrupt):
        session.send_message("Hi")
    assert session.history == ()  # nosec B101

    session.send_message("Hi again")
    roles = [c["role"] for c in transport.calls[1]["body"]["contents"]]
    assert roles == ["user"]  # nosec B101


def test_interrupt_mid_stream_rolls_back_and_closes_stream(settings, make_transport):
    def interrupted():
        yield _sse("Hel")
        raise KeyboardInterrupt

    transport = make_transport(stream_outcomes=[interrupted()])
    session = ChatGenerator(settings, transport=transport).create_session()
    chunks = []

    with pytest.raises(KeyboardInterrupt):
        session.send_message_stream("Hi", chunks.append)
    assert chunks == ["Hel"]  # nosec B101
    assert session.history == ()  # nosec B101
    assert transport.closed_streams == 1  # nosec B101


def test_failing_chunk_callback_closes_stream(settings, make_transport):
    transport = make_transport(stream_outcomes=[[_sse("x"), _sse("y")]])
    session = ChatGenerator(settings, transport=transport).create_session()

    def explode(_chunk):
        raise RuntimeError("render failed")

    with pytest.raises(RuntimeError):
        session.send_message_stream("Hi", explode)
    assert transport.closed_streams == 1  # nosec B101


def test_send_with_images_puts_inline_parts_in_history(settings, make_transport, answer):
    transport = make_transport([answer("a dog")])
    session = ChatGenerator(settings, transport=transport).create_session()
    image = ImageData.from_base64("aGVsbG8=", mime_type="image/webp")

    session.send_message("What is this?", images=[image])
    user = session.history[0]
    assert user.content[1].image == image  # nosec B101
    parts = transport.calls[0]["body"]["contents"][0]["parts"]
    assert parts == [  # nosec B101
        {"text": "What is this?"},
        {"inlineData": {"mimeType": "image/webp", "data": "aGVsbG8="}},
    ]


def test_export_restore_round_trip_zeroes_rotation(generator, settings, make_transport, answer):
    transport = make_transport([answer("hi there")])
    generator._transport = transport
    session = generator.create_session(system_prompt="Stay on topic.")
    session.send_message("hello")
    session._cursor = RotationCursor(model_index=1, credential_index=0, attempt_count=2)

    state = session.export_session()
    restored = generator.restore_session(state)

    assert restored.history == session.history  # nosec B101
    assert restored.credentials == settings.api_keys  # nosec B101
    assert restored.models == settings.models  # nosec B101
    assert restored.default_prompt == "Be kind."  # nosec B101
    assert restored.system_prompt == "Stay on topic."  # nosec B101
    assert restored.base_url == "https://gemini.test"  # nosec B101
    assert restored.cursor == RotationCursor()  # nosec B101
    # Export leaves the live session's rotation alone.
    assert session.cursor.attempt_count == 2  # nosec B101


def test_exported_snapshot_is_independent_of_later_sends(settings, make_transport, answer):
    transport = make_transport([answer("one"), answer("two")])
    session = ChatGenerator(settings, transport=transport).create_session()
    session.send_message("first")
    state = session.export_session()

    session.send_message("second")
    assert len(state.history) == 2  # nosec B101
    assert len(session.history) == 4  # nosec B101


def test_state_survives_json_round_trip(settings, make_transport, answer):
    transport = make_transport([answer("pong")])
    session = ChatGenerator(settings, transport=transport).create_session()
    session.send_message("ping", images=[ImageData.from_bytes(b"abc")])

    state = session.export_session()
    loaded = ChatSessionState.model_validate_json(state.model_dump_json())
    assert loaded == state  # nosec B101
    assert ChatSession.from_state(loaded, transport=transport).history == session.history  # nosec B101


def test_clear_history_resets_rotation(settings, make_transport, answer):
    transport = make_transport([answer("x")])
    session = ChatGenerator(settings, transport=transport).create_session()
    session.send_message("hi")
    session._cursor = RotationCursor(model_index=1, credential_index=1, attempt_count=3)

    session.clear_history()
    assert session.history == ()  # nosec B101
    assert session.cursor == RotationCursor()  # nosec B101


def test_history_view_is_a_copy(settings, make_transport, answer):
    session = ChatGenerator(settings, transport=make_transport([answer("x")])).create_session()
    session.send_message("hi")
    view = session.history
    session.clear_history()
    assert len(view) == 2  # nosec B101


def test_create_session_overrides_and_validation(settings, make_transport):
    generator = ChatGenerator(settings, transport=make_transport())
    session = generator.create_session(credentials=["solo-key-123"], models=["solo-model"])
    assert session.credentials == ("solo-key-123",)  # nosec B101
    assert session.current_model == "solo-model"  # nosec B101
    with pytest.raises(ConfigurationError):
        generator.create_session(credentials=[])
