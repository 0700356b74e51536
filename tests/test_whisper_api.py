"""TDD: WhisperApiClient tests written FIRST"""
import httpx
import pytest

from whisper_cloud.constants import OPENAI_TRANSCRIPTIONS_URL
from whisper_cloud.transcription.provider import EngineError
from whisper_cloud.transcription.whisper_api import WhisperApiClient

WAV = b"RIFF-fake-wav-bytes"


def make_client(handler) -> WhisperApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WhisperApiClient(http_client=http)


def json_reply(payload, status: int = 200):
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status, json=payload)

    return handler, captured


# ── outbound request ──────────────────────────────────────────────────────────


async def test_posts_to_transcriptions_endpoint_with_bearer():
    handler, captured = json_reply({"text": "hi"})
    client = make_client(handler)

    await client.send(WAV, "sk-test", None)

    [request] = captured
    assert request.method == "POST"
    assert str(request.url) == OPENAI_TRANSCRIPTIONS_URL
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["Content-Type"].startswith("multipart/form-data")


async def test_multipart_carries_file_and_model():
    handler, captured = json_reply({"text": "hi"})
    client = make_client(handler)

    await client.send(WAV, "sk-test", None)

    body = captured[0].content
    assert b'name="file"; filename="audio.wav"' in body
    assert b"Content-Type: audio/wav" in body
    assert WAV in body
    assert b'name="model"\r\n\r\nwhisper-1\r\n' in body


async def test_language_field_only_when_hint_given():
    handler, captured = json_reply({"text": "hi"})
    client = make_client(handler)

    await client.send(WAV, "sk-test", None)
    await client.send(WAV, "sk-test", "de")

    assert b'name="language"' not in captured[0].content
    assert b'name="language"\r\n\r\nde\r\n' in captured[1].content


async def test_language_hint_is_not_validated():
    handler, captured = json_reply({"text": "hi"})
    client = make_client(handler)

    await client.send(WAV, "sk-test", "not-a-real-code")

    assert b"not-a-real-code" in captured[0].content


async def test_custom_endpoint():
    handler, captured = json_reply({"text": "hi"})
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = WhisperApiClient(http_client=http, endpoint="http://localhost:9000/v1/audio/transcriptions")

    await client.send(WAV, "sk-test")

    assert str(captured[0].url) == "http://localhost:9000/v1/audio/transcriptions"
    assert client.endpoint == "http://localhost:9000/v1/audio/transcriptions"


# ── response handling ─────────────────────────────────────────────────────────


async def test_returns_trimmed_text():
    handler, _ = json_reply({"text": "  hello world \n"})

    assert await make_client(handler).send(WAV, "sk-test") == "hello world"


@pytest.mark.parametrize("payload", [{}, {"text": None}, {"text": 42}, ["text"], "text"])
async def test_missing_or_non_string_text_is_empty(payload):
    handler, _ = json_reply(payload)

    assert await make_client(handler).send(WAV, "sk-test") == ""


async def test_non_success_status_includes_status_and_body():
    client = make_client(lambda request: httpx.Response(401, text="invalid key"))

    with pytest.raises(EngineError) as exc_info:
        await client.send(WAV, "sk-secret")

    message = str(exc_info.value)
    assert "401" in message
    assert "invalid key" in message
    assert "sk-secret" not in message


async def test_server_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="overloaded")

    with pytest.raises(EngineError, match="503"):
        await make_client(handler).send(WAV, "sk-test")

    assert len(calls) == 1


async def test_transport_error_becomes_engine_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EngineError, match="Request failed: connection refused"):
        await make_client(handler).send(WAV, "sk-test")


async def test_unparseable_body_becomes_engine_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(EngineError, match="Failed to parse response"):
        await client.send(WAV, "sk-test")


async def test_unencodable_credential_becomes_engine_error():
    handler, captured = json_reply({"text": "hi"})

    with pytest.raises(EngineError, match="Failed to create request"):
        await make_client(handler).send(WAV, "sk-tést")

    assert captured == []


# ── connection pool ownership ─────────────────────────────────────────────────


async def test_injected_client_is_left_open():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    client = WhisperApiClient(http_client=http)

    await client.aclose()

    assert not http.is_closed
    await http.aclose()


async def test_owned_client_is_closed():
    async with WhisperApiClient() as client:
        http = client._http

    assert http.is_closed


async def test_timeout_is_forwarded_to_owned_client():
    client = WhisperApiClient(timeout=7.5)

    assert client._http.timeout == httpx.Timeout(7.5)
    await client.aclose()


# ── credential redaction ──────────────────────────────────────────────────────


async def test_rejected_header_error_never_quotes_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.LocalProtocolError("Illegal header value b'Bearer sk-secret\\n'")

    with pytest.raises(EngineError, match="Failed to create request") as exc_info:
        await make_client(handler).send(WAV, "sk-secret\n")

    assert "sk-secret" not in str(exc_info.value)
    assert exc_info.value.__cause__ is None


async def test_transport_error_text_is_redacted():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused for sk-secret", request=request)

    with pytest.raises(EngineError) as exc_info:
        await make_client(handler).send(WAV, "sk-secret")

    assert "sk-secret" not in str(exc_info.value)
    assert "<redacted>" in str(exc_info.value)
