# psl_api/storage.py
from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from psl_api.errors import StorageError
from psl_api.models import Dataset

logger = logging.getLogger(__name__)

DATA_STORAGE_KEY = "psl_2025_data"
LAST_FETCH_KEY = "psl_2025_last_fetch"
FORCE_REFRESH_KEY = "psl_force_refresh"


def now_ms() -> int:
    return int(time.time() * 1000)


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local string store (single-instance deploys, tests)."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self):
        return list(self._items.keys())


class JsonFileKeyValueStore:
    """
    String store persisted as one JSON object on disk.

    Every write rewrites the whole file through a temp file + os.replace,
    so readers never observe a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Snapshot file %s unreadable, treating as empty: %s", self.path, e)
            return {}
        return raw if isinstance(raw, dict) else {}

    def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f)
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = str(value)
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            items.pop(key)
            self._save(items)


class SnapshotStore:
    """
    Last good Dataset + its fetch timestamp, on top of a KeyValueStore.

    Persisted layout:
      psl_2025_data        -> JSON dataset
      psl_2025_last_fetch  -> epoch millis as decimal string
      psl_force_refresh    -> "true" when a forced refresh is pending
    """

    def __init__(self, backend: KeyValueStore, clock: Callable[[], int] = now_ms) -> None:
        self.backend = backend
        self.clock = clock

    def get(self) -> Optional[Dataset]:
        try:
            raw = self.backend.get_item(DATA_STORAGE_KEY)
            if not raw:
                return None
            return Dataset.from_dict(json.loads(raw))
        except Exception as e:
            # Corrupt cache is indistinguishable from no cache
            logger.error("Error retrieving cached PSL data: %s", e)
            return None

    def put(self, dataset: Dataset) -> None:
        try:
            payload = json.dumps(dataset.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Dataset not serializable: {e}") from e

        try:
            self.backend.set_item(DATA_STORAGE_KEY, payload)
            self.backend.set_item(LAST_FETCH_KEY, str(self.clock()))
        except Exception as e:
            raise StorageError(f"Error storing PSL data: {e}") from e

    def clear(self) -> None:
        self.backend.remove_item(DATA_STORAGE_KEY)

    def last_fetch_time(self) -> Optional[int]:
        raw = self.backend.get_item(LAST_FETCH_KEY)
        if raw is None:
            return None
        try:
            return int(str(raw).strip())
        except ValueError:
            logger.warning("Ignoring malformed last-fetch timestamp: %r", raw)
            return None

    def request_force_refresh(self) -> None:
        self.backend.set_item(FORCE_REFRESH_KEY, "true")
        self.clear()
        logger.info("Data refresh forced for next fetch")

    def force_refresh_pending(self) -> bool:
        return self.backend.get_item(FORCE_REFRESH_KEY) == "true"

    def pop_force_flag(self) -> bool:
        """Return whether a forced refresh was pending and clear the flag."""
        pending = self.force_refresh_pending()
        self.backend.remove_item(FORCE_REFRESH_KEY)
        return pending
