from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from whisper_cloud.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    OPENAI_TRANSCRIPTIONS_URL,
)


@dataclass(frozen=True)
class Config:
    """Host-side settings. The provider itself never reads the environment."""

    log_level: str
    openai_api_key: Optional[str]
    api_url: str
    request_timeout: float

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        api_url = os.getenv("WHISPER_API_URL", OPENAI_TRANSCRIPTIONS_URL)
        raw_timeout = os.getenv("WHISPER_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))

        try:
            request_timeout = float(raw_timeout)
        except ValueError as exc:
            raise ValueError(f"WHISPER_TIMEOUT must be a number, got {raw_timeout!r}") from exc

        return cls._validate(
            log_level=log_level,
            openai_api_key=openai_api_key,
            api_url=api_url.strip(),
            request_timeout=request_timeout,
        )

    @staticmethod
    def _validate(
        log_level: str,
        openai_api_key: Optional[str],
        api_url: str,
        request_timeout: float,
    ) -> "Config":
        match api_url:
            case "":
                raise ValueError("WHISPER_API_URL must not be empty")
            case _:
                pass

        match request_timeout:
            case t if t <= 0:
                raise ValueError("WHISPER_TIMEOUT must be positive")
            case _:
                pass

        return Config(
            log_level=log_level,
            openai_api_key=openai_api_key,
            api_url=api_url,
            request_timeout=request_timeout,
        )
