"""All magic values live here — no inline literals anywhere else."""

# Audio defaults for uploads that carry no format metadata.
# The client records 16-bit PCM at 16 kHz, mono, little-endian.
DEFAULT_SAMPLE_RATE = 16000
DEFAULT_CHANNELS = 1
DEFAULT_BITS_PER_SAMPLE = 16
DEFAULT_LANGUAGE_CODE = "auto"
DEFAULT_FILE_FORMAT = "pcm_s16le_16"
WAV_HEADER_SIZE = 44

# Outbound provider calls
TRANSCRIPTION_TIMEOUT: float = 30.0
KNOWN_PROVIDERS = ("elevenlabs", "chutes")
DEFAULT_PROVIDER_ORDER = ",".join(KNOWN_PROVIDERS)

# ElevenLabs speech-to-text
ELEVENLABS_URL = "https://api.elevenlabs.io/v1/speech-to-text"
ELEVENLABS_MODEL_ID = "scribe_v1"
ELEVENLABS_KEY_HEADER = "xi-api-key"
ELEVENLABS_FORMAT_PCM = "pcm_s16le_16"
ELEVENLABS_FORMAT_OTHER = "other"
ELEVENLABS_FILENAME_PCM = "audio.pcm"
ELEVENLABS_FILENAME_WAV = "audio.wav"

# Chutes whisper-large-v3
CHUTES_URL = "https://chutes-whisper-large-v3.chutes.ai/transcribe"

# OpenRouter chat relay
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "meta-llama/llama-3.3-70b-instruct"

# ffmpeg compression
FFMPEG_BINARY = "ffmpeg"
FFMPEG_TIMEOUT: float = 60.0
COMPRESSION_FORMATS = ("ogg", "mp3")
FFMPEG_CODEC_ARGS = {
    "ogg": ["-f", "ogg", "-c:a", "libvorbis", "-q:a", "2"],
    "mp3": ["-f", "mp3", "-c:a", "libmp3lame", "-b:a", "32k"],
}

# silence collection
SILENCE_STORE_PATH = ".silence_records.json"
RECORD_ID_LENGTH = 15
RECORD_AUDIO_MAX = 1_000_000
RECORD_RESULT_MAX = 10_000

# Log / user-facing messages
MSG_RELAY_STARTING = "Silence!"
MSG_SPEAK_START = "Starting audio processing request"
MSG_TRANSCRIBING = "Starting audio transcription (language=%s, format=%s)"
MSG_TRANSCRIBE_OK = "✓ Transcribed %d bytes (%.1fs)"
MSG_TRANSCRIBE_FAIL = "✗ Transcription failed (%.1fs): %s"
MSG_PROVIDER_FAILED = "Provider %d (%s) failed: %s"
MSG_BACKGROUND_START = "Compressing %d bytes for storage"
MSG_BACKGROUND_DONE = "Background processing completed (record %s)"
MSG_BACKGROUND_FAIL = "Background compression/storage failed"

# Speak error payloads
MSG_ERR_EMPTY_AUDIO = "audio file is empty"
MSG_ERR_INVALID_FORMAT = "Invalid file_format: %s"
MSG_ERR_TRANSCRIBE = "Failed to transcribe audio: %s"

# Chat relay error payloads
MSG_ERR_NO_MESSAGES = "Messages are required"
MSG_ERR_AI_FAILED = "Failed to process AI request"
MSG_ERR_AI_EMPTY = "No response from AI model"
MSG_ERR_AI_NOT_CONFIGURED = "AI relay is not configured in this setup."
