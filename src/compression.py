"""Audio compression by piping through an external ffmpeg binary."""
import asyncio
import logging

from src.constants import (
    COMPRESSION_FORMATS,
    DEFAULT_SAMPLE_RATE,
    FFMPEG_BINARY,
    FFMPEG_CODEC_ARGS,
    FFMPEG_TIMEOUT,
)

logger = logging.getLogger(__name__)


class CompressionError(Exception):
    """Raised when ffmpeg is missing, times out or exits non-zero."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(f"ffmpeg compression failed: {message}" + (f", stderr: {stderr}" if stderr else ""))


def ffmpeg_args(fmt: str = "ogg", ffmpeg_path: str = FFMPEG_BINARY) -> list[str]:
    """Build the ffmpeg argv for WAV on stdin → mono 16 kHz ``fmt`` on stdout."""
    match fmt:
        case f if f in COMPRESSION_FORMATS:
            codec = FFMPEG_CODEC_ARGS[f]
        case _:
            raise ValueError(f"Unsupported compression format: {fmt}")
    return [
        ffmpeg_path,
        "-f", "wav",
        "-i", "pipe:0",
        *codec,
        "-ac", "1",
        "-ar", str(DEFAULT_SAMPLE_RATE),
        "pipe:1",
    ]


async def compress_audio(
    wav: bytes,
    fmt: str = "ogg",
    ffmpeg_path: str = FFMPEG_BINARY,
    timeout: float = FFMPEG_TIMEOUT,
) -> bytes:
    args = ffmpeg_args(fmt, ffmpeg_path)
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise CompressionError(f"{ffmpeg_path} not found") from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(wav), timeout=timeout)
    except asyncio.TimeoutError as exc:
        process.kill()
        await process.wait()
        raise CompressionError(f"timed out after {timeout}s") from exc

    match process.returncode:
        case 0:
            logger.debug("Compressed %d → %d bytes (%s)", len(wav), len(stdout), fmt)
            return stdout
        case code:
            err = stderr.decode(errors="replace").strip() if stderr else ""
            raise CompressionError(f"exit status {code}", err)
