# pointnow_console/core/storage.py
# SPDX-License-Identifier: Apache-2.0
"""
Durable key/value storage backing the session store.

The session store only ever needs three operations (`get_item`, `set_item`,
`remove_item`) on string values, mirroring browser local storage. Keeping the
interface that small lets the console swap backends without touching the
store:

  • `MemoryStorage`   — process memory; used in tests and for kiosk setups
                        where nothing may be written to disk.
  • `JsonFileStorage` — a single JSON object on disk; survives restarts so an
                        operator stays logged in across deploys.

`JsonFileStorage` writes through a temporary file and `os.replace`, so a crash
mid-write never leaves a truncated document. A missing or unreadable file is
treated as empty storage.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Storage persisted as one flat JSON object of string values.

    Args:
      path: Location of the JSON document. Parent directories are created on
        first write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            log.warning("Storage file %s unreadable: %s", self.path, e)
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("Storage file %s is not valid JSON; ignoring it", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except BaseException:
            # Leave the previous document in place.
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


def build_storage(backend: str, path: str) -> Storage:
    """Return the storage implementation named by `backend`.

    Unknown names fall back to file storage so a typo in `.env` does not
    silently drop durability.
    """
    if backend.strip().lower() == "memory":
        return MemoryStorage()
    if backend.strip().lower() != "file":
        log.warning("Unknown storage backend %r; using file storage", backend)
    return JsonFileStorage(path)
