"""WAV container helpers — pure functions, no mocking."""
import struct

import pytest

from src.transcription.wav import audio_length_seconds, pcm_to_wav, strip_wav_header


def test_container_adds_44_byte_header():
    pcm = b"\x01\x02" * 500
    wav = pcm_to_wav(pcm, 16000, 1, 16)
    assert len(wav) == len(pcm) + 44


def test_container_magic_markers():
    wav = pcm_to_wav(b"\x00" * 10)
    assert wav[0:4] == b"RIFF"
    assert wav[8:12] == b"WAVE"
    assert wav[12:16] == b"fmt "
    assert wav[36:40] == b"data"


def test_container_size_fields_are_little_endian():
    pcm = b"\x00" * 32000
    wav = pcm_to_wav(pcm, 16000, 1, 16)
    assert struct.unpack("<I", wav[4:8])[0] == 36 + 32000
    assert struct.unpack("<I", wav[40:44])[0] == 32000


def test_container_fmt_chunk():
    wav = pcm_to_wav(b"\x00" * 4, 16000, 1, 16)
    fmt_size, tag, channels, rate, byte_rate, align, bits = struct.unpack("<IHHIIHH", wav[16:36])
    assert fmt_size == 16
    assert tag == 1
    assert channels == 1
    assert rate == 16000
    assert byte_rate == 32000
    assert align == 2
    assert bits == 16


def test_container_stereo_44k():
    wav = pcm_to_wav(b"\x00" * 8, 44100, 2, 16)
    _, _, channels, rate, byte_rate, align, _ = struct.unpack("<IHHIIHH", wav[16:36])
    assert (channels, rate, byte_rate, align) == (2, 44100, 176400, 4)


def test_container_preserves_payload():
    pcm = bytes(range(256))
    assert pcm_to_wav(pcm)[44:] == pcm


def test_container_is_deterministic():
    pcm = b"\x10\x20" * 8
    assert pcm_to_wav(pcm) == pcm_to_wav(pcm)


def test_strip_header_recovers_pcm():
    pcm = b"\x05\x06" * 20
    assert strip_wav_header(pcm_to_wav(pcm)) == pcm


def test_strip_header_rejects_short_input():
    with pytest.raises(ValueError, match="too small"):
        strip_wav_header(b"RIFF")


def test_audio_length_one_second():
    assert audio_length_seconds(32000) == 1


def test_audio_length_rounds_up():
    assert audio_length_seconds(32002) == 2


def test_audio_length_empty():
    assert audio_length_seconds(0) == 0
