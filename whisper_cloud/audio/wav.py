"""Float samples → 16-bit mono PCM WAV bytes."""
import math
import struct
from collections.abc import Sequence

from whisper_cloud.constants import (
    PCM16_SCALE,
    WAV_BITS_PER_SAMPLE,
    WAV_BYTES_PER_SAMPLE,
    WAV_CHANNELS,
    WAV_FMT_CHUNK_SIZE,
    WAV_FORMAT_PCM,
)

# RIFF header, fmt chunk and data chunk header, all little-endian.
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    return _F32.unpack(_F32.pack(value))[0]


def _to_pcm16(sample: float) -> int:
    """Clamp to [-1.0, 1.0], scale by 32767 in single precision and truncate
    toward zero.

    The product is rounded to f32 before truncation, so e.g. 0.00048829615
    encodes as 16, not the 15 a double-precision multiply would give.
    """
    match sample:
        case s if math.isnan(s):
            return 0
        case s:
            clamped = _f32(min(max(s, -1.0), 1.0))
            return int(_f32(clamped * PCM16_SCALE))


def samples_to_wav(samples: Sequence[float], sample_rate: int) -> bytes:
    """Encode normalized float samples as a self-contained mono 16-bit WAV.

    -1.0 maps to -32767, not -32768: scaling is symmetric and the result is
    truncated, never rounded.
    """
    data_size = len(samples) * WAV_BYTES_PER_SAMPLE
    header = _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        WAV_FMT_CHUNK_SIZE,
        WAV_FORMAT_PCM,
        WAV_CHANNELS,
        sample_rate,
        sample_rate * WAV_CHANNELS * WAV_BYTES_PER_SAMPLE,
        WAV_CHANNELS * WAV_BYTES_PER_SAMPLE,
        WAV_BITS_PER_SAMPLE,
        b"data",
        data_size,
    )
    body = struct.pack(f"<{len(samples)}h", *map(_to_pcm16, samples))
    return header + body
