"""Shared fakes: no test touches the network."""

from __future__ import annotations

import threading
import time
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

from psl_api.adapters import SourceAdapter
from psl_api.errors import FetchError
from psl_api.models import Dataset
from psl_api.storage import MemoryKeyValueStore, SnapshotStore

NOW_MS = 1_746_700_000_000  # 2025-05-08 (approx.)


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", content_type: str = "text/html") -> None:
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """requests.Session stand-in: url -> FakeResponse or exception. Unknown urls raise ConnectionError."""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> None:
        self.routes = routes or {}
        self.calls: List[str] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(url)
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeFetcher:
    """PageFetcher stand-in keyed by url."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    def fetch_text(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(f"Direct fetch failed for {url}")
        return self.pages[url]


class FakeAdapter(SourceAdapter):
    def __init__(
        self,
        name: str,
        result: Optional[Dataset] = None,
        error: Optional[Exception] = None,
        partial: bool = False,
        fallback: bool = False,
    ) -> None:
        self.name = name
        self.result = result
        self.error = error
        self.partial = partial
        self.fallback = fallback
        self.calls = 0
        self.seen_prior: Optional[Dataset] = None

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        self.calls += 1
        self.seen_prior = prior
        if self.error is not None:
            raise self.error
        return self.result


class SlowAdapter(FakeAdapter):
    """Live adapter that takes a while and records how many threads were inside produce() at once."""

    def __init__(self, result: Dataset, delay: float = 0.2) -> None:
        super().__init__("cricinfo", result=result)
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._guard = threading.Lock()

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        with self._guard:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return super().produce(prior)
        finally:
            with self._guard:
                self.active -= 1


class Clock:
    def __init__(self, now: int = NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def backend() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(backend: MemoryKeyValueStore, clock: Clock) -> SnapshotStore:
    return SnapshotStore(backend, clock=clock)
