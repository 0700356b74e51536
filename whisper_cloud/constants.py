"""All magic values live here — no inline literals anywhere else."""

# OpenAI transcription endpoint
OPENAI_TRANSCRIPTIONS_URL = "https://api.openai.com/v1/audio/transcriptions"
WHISPER_MODEL = "whisper-1"
AUTH_HEADER = "Authorization"
AUTH_SCHEME = "Bearer"

# Multipart form fields
FORM_FIELD_FILE = "file"
FORM_FIELD_MODEL = "model"
FORM_FIELD_LANGUAGE = "language"
AUDIO_FILENAME = "audio.wav"
AUDIO_MEDIA_TYPE = "audio/wav"
RESPONSE_TEXT_FIELD = "text"

# Audio the remote service expects: 16 kHz, mono, 16-bit PCM
WHISPER_SAMPLE_RATE = 16000
# 0.1 s at WHISPER_SAMPLE_RATE
MIN_AUDIO_SAMPLES = 1600

# WAV container layout
WAV_FMT_CHUNK_SIZE = 16
WAV_FORMAT_PCM = 1
WAV_CHANNELS = 1
WAV_BITS_PER_SAMPLE = 16
WAV_BYTES_PER_SAMPLE = WAV_BITS_PER_SAMPLE // 8
PCM16_SCALE = 32767.0

# Provider identity
PROVIDER_NAME = "OpenAI Whisper"
CURRENT_MODEL_DESCRIPTION = "whisper-1 (OpenAI API)"
# The API reports no confidence; assume high.
DEFAULT_CONFIDENCE = 1.0

# Config defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT: float = 60.0

# Log messages
MSG_API_KEY_CONFIGURED = "OpenAI Whisper API key configured"
MSG_TRANSCRIBING = "OpenAI Whisper: Transcribing %d samples (%.1fs)"
MSG_TRANSCRIBED = "OpenAI Whisper: Transcribed %d chars from %.1fs audio"
MSG_API_ERROR_LOG = "OpenAI Whisper API error %s: %s"

# Error messages
ERR_NOT_CONFIGURED = "OpenAI API key not configured"
ERR_AUDIO_TOO_SHORT = "Audio too short: %d samples (minimum %d)"
ERR_REQUEST_FAILED = "Request failed: %s"
ERR_API_STATUS = "API error %s: %s"
ERR_PARSE_RESPONSE = "Failed to parse response: %s"
ERR_BUILD_REQUEST = "Failed to create request: %s"
ERR_INVALID_HEADERS = "request headers rejected by the HTTP layer"
REDACTED = "<redacted>"
