"""SilenceRecordStore — the ``silence`` collection, kept in a JSON file."""
import json
import logging
import secrets
import string
import time
from pathlib import Path
from typing import NamedTuple

from src.constants import (
    RECORD_AUDIO_MAX,
    RECORD_ID_LENGTH,
    RECORD_RESULT_MAX,
    SILENCE_STORE_PATH,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class SilenceRecord(NamedTuple):
    id: str
    audio: str
    result: str
    created: int


def _new_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(RECORD_ID_LENGTH))


class SilenceRecordStore:

    def __init__(self, path: Path = Path(SILENCE_STORE_PATH)) -> None:
        self._path = Path(path)
        self._records: dict[str, dict] = {}
        self._load()

    def _load(self) -> None:
        match self._path.exists():
            case True:
                try:
                    with open(self._path) as f:
                        self._records = json.load(f)
                except Exception as e:
                    logger.warning("Record store load failed: %s, starting fresh", e)
                    self._records = {}
            case False:
                pass

    def _save(self) -> None:
        match self._path.exists():
            case False:
                logger.info("Creating silence collection at %s", self._path)
            case True:
                pass
        with open(self._path, "w") as f:
            json.dump(self._records, f, indent=2)

    def create(self, audio: str, result: str = "") -> SilenceRecord:
        match (len(audio), len(result)):
            case (0, _):
                raise ValueError("audio is required")
            case (a, _) if a > RECORD_AUDIO_MAX:
                raise ValueError(f"audio exceeds {RECORD_AUDIO_MAX} characters")
            case (_, r) if r > RECORD_RESULT_MAX:
                raise ValueError(f"result exceeds {RECORD_RESULT_MAX} characters")
            case _:
                pass
        record = SilenceRecord(
            id=_new_id(), audio=audio, result=result, created=int(time.time())
        )
        self._records[record.id] = record._asdict()
        self._save()
        return record

    def get(self, record_id: str) -> SilenceRecord | None:
        match self._records.get(record_id):
            case None:
                return None
            case raw:
                return SilenceRecord(**raw)

    def records(self) -> list[SilenceRecord]:
        return [SilenceRecord(**raw) for raw in self._records.values()]
