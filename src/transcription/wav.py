"""Pure WAV container helpers.

No I/O and no side effects: bytes in, bytes out.
"""
import math
import struct

from src.constants import (
    DEFAULT_BITS_PER_SAMPLE,
    DEFAULT_CHANNELS,
    DEFAULT_SAMPLE_RATE,
    WAV_HEADER_SIZE,
)

# RIFF size, "WAVE", "fmt ", fmt size, format tag, channels, rate,
# byte rate, block align, bits per sample, "data", data size
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_PCM_FORMAT_TAG = 1
_FMT_CHUNK_SIZE = 16


def pcm_to_wav(
    pcm: bytes,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    channels: int = DEFAULT_CHANNELS,
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE,
) -> bytes:
    """Wrap raw little-endian PCM samples in a canonical 44-byte WAV header."""
    data_size = len(pcm)
    byte_rate = sample_rate * channels * bits_per_sample // 8
    block_align = channels * bits_per_sample // 8
    header = _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        _FMT_CHUNK_SIZE,
        _PCM_FORMAT_TAG,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        b"data",
        data_size,
    )
    return header + pcm


def strip_wav_header(data: bytes) -> bytes:
    """Return the PCM payload of a canonical WAV file."""
    match len(data):
        case n if n < WAV_HEADER_SIZE:
            raise ValueError("file too small to be a valid WAV file")
        case _:
            return data[WAV_HEADER_SIZE:]


def audio_length_seconds(
    size: int,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    channels: int = DEFAULT_CHANNELS,
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE,
) -> int:
    """Duration in whole seconds (rounded up) of ``size`` bytes of PCM."""
    total_samples = size // (bits_per_sample // 8 * channels)
    return math.ceil(total_samples / sample_rate)
