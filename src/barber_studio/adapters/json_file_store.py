"""Key-value store persisted as a single JSON document on disk."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from barber_studio.domain.errors import CorruptRecordError
from barber_studio.services.profiles import KeyValueStore


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Local key-value store, the on-disk analogue of browser storage."""

    path: Path

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        entries = self._load()
        entries[key] = value
        self._dump(entries)

    def remove(self, key: str) -> None:
        entries = self._load()
        if entries.pop(key, None) is not None:
            self._dump(entries)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            entries = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(str(self.path)) from exc
        if not isinstance(entries, dict):
            raise CorruptRecordError(str(self.path))
        return entries

    def _dump(self, entries: dict[str, str]) -> None:
        """Write the document atomically through a temp file in the same dir."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(entries, handle)
            Path(tmp_name).replace(self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
