"""TranscriptionProvider — abstract base for speech-to-text backends, plus the
result type and the closed set of failures every backend raises."""
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Optional

from whisper_cloud.constants import ERR_AUDIO_TOO_SHORT, ERR_NOT_CONFIGURED

ErrorKind = Literal["configuration", "audio_too_short", "engine"]


@dataclass(frozen=True)
class TranscriptResult:
    text: str
    confidence: Optional[float] = None
    is_partial: bool = False


# ── failures ──────────────────────────────────────────────────────────────────


class TranscriptionError(Exception):
    """Base for every failure a provider raises from transcribe()."""

    kind: ErrorKind


class ConfigurationError(TranscriptionError):
    """No usable credential; raised before any network activity."""

    kind: ErrorKind = "configuration"

    def __init__(self, message: str = ERR_NOT_CONFIGURED) -> None:
        super().__init__(message)
        self.message = message


class AudioTooShortError(TranscriptionError):
    kind: ErrorKind = "audio_too_short"

    def __init__(self, samples: int, minimum: int) -> None:
        super().__init__(ERR_AUDIO_TOO_SHORT % (samples, minimum))
        self.samples = samples
        self.minimum = minimum


class EngineError(TranscriptionError):
    """Request, transport, remote status or parse failure. Terminal for the call."""

    kind: ErrorKind = "engine"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ── capability set ────────────────────────────────────────────────────────────


class TranscriptionProvider(ABC):
    @abstractmethod
    async def transcribe(
        self, audio: Sequence[float], language: str | None = None
    ) -> TranscriptResult:
        """Transcribe mono float samples. Raises TranscriptionError on failure."""
        ...

    @abstractmethod
    async def is_model_loaded(self) -> bool: ...

    @abstractmethod
    async def get_current_model(self) -> str | None: ...

    @abstractmethod
    def provider_name(self) -> str: ...
