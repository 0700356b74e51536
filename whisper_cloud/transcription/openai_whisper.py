"""OpenAIWhisperProvider — cloud Whisper speech-to-text backend."""
import logging
from collections.abc import Sequence

import httpx

from whisper_cloud.audio.wav import samples_to_wav
from whisper_cloud.constants import (
    CURRENT_MODEL_DESCRIPTION,
    DEFAULT_CONFIDENCE,
    MIN_AUDIO_SAMPLES,
    MSG_API_KEY_CONFIGURED,
    MSG_TRANSCRIBED,
    MSG_TRANSCRIBING,
    OPENAI_TRANSCRIPTIONS_URL,
    PROVIDER_NAME,
    WHISPER_SAMPLE_RATE,
)
from whisper_cloud.transcription.credentials import CredentialStore
from whisper_cloud.transcription.provider import (
    AudioTooShortError,
    ConfigurationError,
    TranscriptionProvider,
    TranscriptResult,
)
from whisper_cloud.transcription.whisper_api import WhisperApiClient

logger = logging.getLogger(__name__)


def _duration_s(sample_count: int) -> float:
    return sample_count / WHISPER_SAMPLE_RATE


class OpenAIWhisperProvider(TranscriptionProvider):
    """Ready as soon as an API key is set; there is no local model to load.

    Input is always treated as 16 kHz mono. Callers holding audio at another
    rate must resample before calling ``transcribe``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        endpoint: str = OPENAI_TRANSCRIPTIONS_URL,
        timeout: float | None = None,
    ) -> None:
        self._credentials = CredentialStore()
        self._api = WhisperApiClient(http_client, endpoint=endpoint, timeout=timeout)

    # ── credential lifecycle ──────────────────────────────────────────────────

    async def set_api_key(self, key: str) -> None:
        await self._credentials.set(key)
        logger.info(MSG_API_KEY_CONFIGURED)

    async def has_api_key(self) -> bool:
        return await self._credentials.is_configured()

    set_credential = set_api_key
    has_credential = has_api_key

    # ── TranscriptionProvider interface ───────────────────────────────────────

    async def transcribe(
        self, audio: Sequence[float], language: str | None = None
    ) -> TranscriptResult:
        match await self._credentials.get_effective():
            case None:
                raise ConfigurationError()
            case key:
                api_key = key

        match len(audio):
            case n if n < MIN_AUDIO_SAMPLES:
                raise AudioTooShortError(samples=n, minimum=MIN_AUDIO_SAMPLES)
            case _:
                pass

        logger.debug(MSG_TRANSCRIBING, len(audio), _duration_s(len(audio)))

        wav_data = samples_to_wav(audio, WHISPER_SAMPLE_RATE)
        text = await self._api.send(wav_data, api_key, language)

        logger.info(MSG_TRANSCRIBED, len(text), _duration_s(len(audio)))
        return TranscriptResult(text=text, confidence=DEFAULT_CONFIDENCE, is_partial=False)

    async def is_model_loaded(self) -> bool:
        return await self.has_api_key()

    async def get_current_model(self) -> str | None:
        match await self.has_api_key():
            case True:
                return CURRENT_MODEL_DESCRIPTION
            case False:
                return None

    def provider_name(self) -> str:
        return PROVIDER_NAME

    # ── resources ─────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        await self._api.aclose()

    async def __aenter__(self) -> "OpenAIWhisperProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
