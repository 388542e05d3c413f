"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON file holds every key, mirroring how a
browser keeps local storage for one origin:
1. No database setup required
2. The user can open and back up the file directly
3. Whole-file rewrites are fine for a few hundred transactions

TRADEOFFS:
- Every set() rewrites the whole file
- One process at a time

Writes go to a temporary file in the same directory and are moved into
place with os.replace(), so the file is never left half-written.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    File-backed key/value storage.

    The file contains one JSON object mapping keys to string values.
    A missing file reads as empty storage.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read the whole key/value map from disk."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageError(
                f"Storage file {self._path} does not contain a JSON object"
            )
        bad_keys = [k for k, v in data.items() if not isinstance(v, str)]
        if bad_keys:
            raise StorageError(
                f"Storage file {self._path} has non-string values for: "
                f"{', '.join(sorted(bad_keys))}"
            )
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the file with the given map."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write storage file {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True
