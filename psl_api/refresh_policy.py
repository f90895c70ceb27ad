# psl_api/refresh_policy.py
from __future__ import annotations

from typing import Callable

from psl_api.config import REFRESH_INTERVAL_SECONDS
from psl_api.storage import SnapshotStore, now_ms


class RefreshPolicy:
    """Decides whether the cached Dataset may be served or a refresh is due."""

    def __init__(
        self,
        store: SnapshotStore,
        interval_seconds: int = REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.store = store
        self.interval_ms = interval_seconds * 1000
        self.clock = clock

    def should_refresh(self) -> bool:
        # Force flag is one-shot
        if self.store.pop_force_flag():
            return True

        last_fetch = self.store.last_fetch_time()
        if last_fetch is None:
            return True

        return self.clock() - last_fetch > self.interval_ms
