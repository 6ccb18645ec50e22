"""Wiring: Config → provider chain / handlers, and the file harness."""
import json

import pytest
from unittest.mock import AsyncMock, patch

from src.chat.openrouter import OpenRouterChatClient
from src.config import Config
from src.constants import KNOWN_PROVIDERS
from src.main import _parse_args, build_chat_client, build_speak_handler, build_transcriber, main
from src.transcription.chutes import ChutesTranscriptionClient
from src.transcription.elevenlabs import ElevenLabsTranscriptionClient
from src.transcription.types import AudioFormat, TranscriptionResult
from src.transcription.wav import pcm_to_wav


def make_config(**overrides) -> Config:
    fields = dict(
        elevenlabs_api_key="el",
        chutes_api_token="ch",
        openrouter_api_key=None,
        provider_order=("elevenlabs", "chutes"),
        transcription_timeout=30.0,
        transcription_deadline=None,
        ffmpeg_path="ffmpeg",
        compression_format="ogg",
        store_path=".silence_records.json",
        log_level="INFO",
    )
    fields.update(overrides)
    return Config(**fields)


def test_chain_follows_configured_order():
    chain = build_transcriber(make_config(provider_order=("chutes", "elevenlabs")))
    assert [type(p) for p in chain.providers] == [
        ChutesTranscriptionClient,
        ElevenLabsTranscriptionClient,
    ]


def test_chain_skips_providers_without_credentials():
    chain = build_transcriber(make_config(chutes_api_token=None))
    assert [p.name for p in chain.providers] == ["elevenlabs"]


def test_chain_single_provider_override():
    chain = build_transcriber(make_config(), only="chutes")
    assert [p.name for p in chain.providers] == ["chutes"]


def test_chat_client_only_with_key():
    assert build_chat_client(make_config()) is None
    assert isinstance(build_chat_client(make_config(openrouter_api_key="k")), OpenRouterChatClient)


def test_speak_handler_uses_configured_store(tmp_path):
    store_path = tmp_path / "records.json"
    handler = build_speak_handler(make_config(store_path=str(store_path)), build_transcriber(make_config()))
    assert handler._store._path == store_path


def test_main_transcribes_wav_file_as_pcm(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("src.config.load_dotenv", lambda **_: None)
    monkeypatch.setattr("src.main._setup_logging", lambda level: None)
    monkeypatch.setenv("ELEVENLABS_API_KEY", "el")
    pcm = b"\x00\x00" * 16000
    wav_file = tmp_path / "clip.wav"
    wav_file.write_bytes(pcm_to_wav(pcm))

    transcribe = AsyncMock(return_value=TranscriptionResult(text="from file", language_code="en"))
    with patch("src.main.ProviderChain.transcribe", new=transcribe):
        main([str(wav_file), "--no-store"])

    audio, opts = transcribe.call_args.args
    assert audio == pcm
    assert opts.metadata.format == AudioFormat.PCM_S16LE_16
    payload = json.loads(capsys.readouterr().out)
    assert payload["text"] == "from file"
    assert payload["audio_length"] == 1


def test_main_rejects_unknown_provider(tmp_path, monkeypatch):
    monkeypatch.setattr("src.config.load_dotenv", lambda **_: None)
    monkeypatch.setattr("src.main._setup_logging", lambda level: None)
    monkeypatch.setenv("ELEVENLABS_API_KEY", "el")

    with pytest.raises(SystemExit):
        main([str(tmp_path / "x.wav"), "--provider", "whisper"])


@pytest.mark.parametrize("name", KNOWN_PROVIDERS)
def test_parse_args_accepts_every_known_provider(name):
    assert _parse_args(["x.wav", "--provider", name]).provider == name
