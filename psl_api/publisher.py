# psl_api/publisher.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from psl_api.adapters import SourceAdapter
from psl_api.aggregator import utc_now_iso
from psl_api.models import Dataset
from psl_api.pipeline import SOURCE_CACHE, DataRefresher, RefreshOutcome
from psl_api.refresh_policy import RefreshPolicy
from psl_api.storage import SnapshotStore

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, dataset: Dataset) -> None: ...

    def render_news(self, news_items: List[str]) -> None: ...

    def render_social_highlights(self, dataset: Dataset) -> None: ...


class LoggingRenderer:
    def render(self, dataset: Dataset) -> None:
        logger.info("Rendered %d teams, %d fixtures", len(dataset.teams), len(dataset.fixtures))

    def render_news(self, news_items: List[str]) -> None:
        logger.info("Rendered %d news items", len(news_items))

    def render_social_highlights(self, dataset: Dataset) -> None:
        logger.debug("Rendered social highlights")


@dataclass
class AppState:
    """Single owner of what consumers currently see."""

    dataset: Optional[Dataset] = None
    source: Optional[str] = None
    published_at: Optional[str] = None
    last_errors: List[str] = field(default_factory=list)


class Publisher:
    def __init__(self, state: AppState, renderers: Sequence[Renderer] = ()) -> None:
        self.state = state
        self.renderers = list(renderers) or [LoggingRenderer()]

    def publish(self, dataset: Dataset, source: Optional[str] = None) -> None:
        self.state.dataset = dataset
        self.state.source = source
        self.state.published_at = utc_now_iso()

        for r in self.renderers:
            # One broken view must not stop the others
            for call, arg in (
                (r.render, dataset),
                (r.render_news, dataset.news_items),
                (r.render_social_highlights, dataset),
            ):
                try:
                    call(arg)
                except Exception as e:
                    logger.error("Renderer %s.%s failed: %s", type(r).__name__, call.__name__, e)


class DataController:
    """
    Runs refresh cycles and publishes their result; keeps prior state on total failure.

    Cycles are serialised: one thread at a time touches the snapshot store.
    A caller that waited on a running cycle takes that cycle's outcome
    instead of starting another one.
    """

    def __init__(
        self,
        policy: RefreshPolicy,
        store: SnapshotStore,
        adapters: Sequence[SourceAdapter],
        publisher: Publisher,
        now: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.store = store
        self.publisher = publisher
        self.refresher = DataRefresher(policy, store, adapters, now=now)
        self._lock = threading.Lock()
        self._cycles = 0
        self._last_outcome: Optional[RefreshOutcome] = None

    @property
    def state(self) -> AppState:
        return self.publisher.state

    def load(self) -> RefreshOutcome:
        seen = self._cycles
        with self._lock:
            if self._cycles != seen and self._last_outcome is not None:
                logger.debug("Refresh finished while waiting; reusing its outcome")
                return self._last_outcome
            return self._cycle()

    def force_refresh(self) -> RefreshOutcome:
        with self._lock:
            self.store.request_force_refresh()
            return self._cycle()

    def _cycle(self) -> RefreshOutcome:
        outcome = self.refresher.run()
        self.state.last_errors = list(outcome.errors)
        self._cycles += 1
        self._last_outcome = outcome

        if outcome.dataset is None:
            logger.error("Failed to get PSL data; keeping previously published state")
            return outcome
        if outcome.source == SOURCE_CACHE and self.state.dataset is not None:
            # Still fresh; consumers already have it
            return outcome

        self.publisher.publish(outcome.dataset, outcome.source)
        return outcome

    def debug_state(self) -> Dict[str, Any]:
        ds = self.state.dataset
        return {
            "source": self.state.source,
            "published_at": self.state.published_at,
            "last_fetch_ms": self.store.last_fetch_time(),
            "force_refresh_pending": self.store.force_refresh_pending(),
            "adapters": [a.name for a in self.refresher.adapters],
            "team_count": len(ds.teams) if ds else 0,
            "fixture_count": len(ds.fixtures) if ds else 0,
            "last_errors": list(self.state.last_errors),
        }
