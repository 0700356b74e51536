"""Host wiring — Config → logging → OpenAIWhisperProvider."""
import logging

from rich.logging import RichHandler

from whisper_cloud.config import Config
from whisper_cloud.transcription.openai_whisper import OpenAIWhisperProvider


def setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


async def build_provider(config: Config) -> OpenAIWhisperProvider:
    provider = OpenAIWhisperProvider(endpoint=config.api_url, timeout=config.request_timeout)
    if config.openai_api_key:
        await provider.set_api_key(config.openai_api_key)
    return provider


async def create_provider_from_env() -> OpenAIWhisperProvider:
    config = Config.from_env()
    setup_logging(config.log_level)
    return await build_provider(config)
