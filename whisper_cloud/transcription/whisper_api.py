"""WhisperApiClient — one-shot multipart POST to the OpenAI transcription API."""
import logging

import httpx

from whisper_cloud.constants import (
    AUDIO_FILENAME,
    AUDIO_MEDIA_TYPE,
    AUTH_HEADER,
    AUTH_SCHEME,
    ERR_API_STATUS,
    ERR_BUILD_REQUEST,
    ERR_INVALID_HEADERS,
    ERR_PARSE_RESPONSE,
    ERR_REQUEST_FAILED,
    FORM_FIELD_FILE,
    FORM_FIELD_LANGUAGE,
    FORM_FIELD_MODEL,
    MSG_API_ERROR_LOG,
    OPENAI_TRANSCRIPTIONS_URL,
    REDACTED,
    RESPONSE_TEXT_FIELD,
    WHISPER_MODEL,
)
from whisper_cloud.transcription.provider import EngineError

logger = logging.getLogger(__name__)


def _form_fields(language: str | None) -> dict[str, str]:
    match language:
        case None:
            return {FORM_FIELD_MODEL: WHISPER_MODEL}
        case lang:
            return {FORM_FIELD_MODEL: WHISPER_MODEL, FORM_FIELD_LANGUAGE: lang}


def _new_http_client(timeout: float | None) -> httpx.AsyncClient:
    """Without an explicit timeout, httpx's own default applies."""
    match timeout:
        case None:
            return httpx.AsyncClient()
        case seconds:
            return httpx.AsyncClient(timeout=seconds)


def _redact(text: str, credential: str) -> str:
    """Strip the key, raw or escaped, out of third-party error text."""
    for form in {credential, repr(credential)[1:-1]} - {""}:
        text = text.replace(form, REDACTED)
    return text


def _extract_text(payload: object) -> str:
    """Top-level "text" when it is a string, else empty. Always stripped."""
    match payload.get(RESPONSE_TEXT_FIELD) if isinstance(payload, dict) else None:
        case str() as text:
            return text.strip()
        case _:
            return ""


class WhisperApiClient:
    """Owns the HTTP connection pool shared by every transcription call.

    An injected ``http_client`` belongs to the caller and is left open by
    ``aclose()``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        endpoint: str = OPENAI_TRANSCRIPTIONS_URL,
        timeout: float | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else _new_http_client(timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, container: bytes, credential: str, language: str | None = None) -> str:
        """POST the WAV container and return the trimmed transcript. Raises EngineError."""
        try:
            response = await self._http.post(
                self._endpoint,
                headers={AUTH_HEADER: f"{AUTH_SCHEME} {credential}"},
                data=_form_fields(language),
                files={FORM_FIELD_FILE: (AUDIO_FILENAME, container, AUDIO_MEDIA_TYPE)},
            )
        except httpx.LocalProtocolError:
            # h11 quotes the offending header, i.e. the key, in its message
            raise EngineError(ERR_BUILD_REQUEST % ERR_INVALID_HEADERS) from None
        except httpx.HTTPError as exc:
            raise EngineError(ERR_REQUEST_FAILED % _redact(str(exc), credential)) from exc
        except (TypeError, ValueError) as exc:
            # header or form encoding rejected before anything was sent
            raise EngineError(ERR_BUILD_REQUEST % _redact(str(exc), credential)) from exc

        if not response.is_success:
            logger.error(MSG_API_ERROR_LOG, response.status_code, response.text)
            raise EngineError(ERR_API_STATUS % (response.status_code, response.text))

        try:
            payload = response.json()
        except ValueError as exc:
            raise EngineError(ERR_PARSE_RESPONSE % (exc,)) from exc
        return _extract_text(payload)

    async def aclose(self) -> None:
        match self._owns_http:
            case True:
                await self._http.aclose()
            case False:
                pass

    async def __aenter__(self) -> "WhisperApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
