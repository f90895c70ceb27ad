# psl_api/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from psl_api.adapters import SourceAdapter
from psl_api.aggregator import merge_datasets, utc_now_iso
from psl_api.errors import StorageError
from psl_api.models import Dataset
from psl_api.refresh_policy import RefreshPolicy
from psl_api.storage import SnapshotStore

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_STALE_CACHE = "stale-cache"


@dataclass
class RefreshOutcome:
    dataset: Optional[Dataset]
    source: Optional[str] = None
    refreshed: bool = False
    errors: List[str] = field(default_factory=list)


class DataRefresher:
    """
    Policy-gated refresh over an ordered adapter list.

    - Cache still fresh: serve it without touching any adapter.
    - Otherwise adapters run in order; the first non-empty result wins.
    - Live results are merged with the prior dataset, stamped, and persisted
      (best-effort). Fallback results are returned untouched.
    - The stored snapshot is only ever replaced by a successful live result,
      never blanked by a failing cycle.
    """

    def __init__(
        self,
        policy: RefreshPolicy,
        store: SnapshotStore,
        adapters: Sequence[SourceAdapter],
        now: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.policy = policy
        self.store = store
        self.adapters = list(adapters)
        self.now = now

    def run(self) -> RefreshOutcome:
        if not self.policy.should_refresh():
            cached = self.store.get()
            if cached is not None:
                logger.info("Using cached PSL data from %s", self.store.last_fetch_time())
                return RefreshOutcome(dataset=cached, source=SOURCE_CACHE)

        prior = self.store.get()
        errors: List[str] = []

        for adapter in self.adapters:
            try:
                produced = adapter.produce(prior)
            except Exception as e:
                logger.error("Adapter %s failed: %s", adapter.name, e)
                errors.append(f"{adapter.name}: {e}")
                continue

            if produced is None or produced.is_empty():
                logger.info("Adapter %s returned no data", adapter.name)
                continue

            if adapter.fallback:
                return RefreshOutcome(dataset=produced, source=adapter.name, refreshed=True, errors=errors)

            dataset = merge_datasets(produced, prior, partial=adapter.partial)
            dataset.last_updated = self.now()
            self._persist(dataset)

            logger.info("PSL data updated from %s", adapter.name)
            return RefreshOutcome(dataset=dataset, source=adapter.name, refreshed=True, errors=errors)

        if prior is not None:
            logger.error("Every source failed; serving stale cached PSL data")
            return RefreshOutcome(dataset=prior, source=SOURCE_STALE_CACHE, refreshed=True, errors=errors)

        logger.error("Every source failed and no cached PSL data exists")
        return RefreshOutcome(dataset=None, refreshed=True, errors=errors)

    def _persist(self, dataset: Dataset) -> None:
        try:
            self.store.put(dataset)
        except StorageError as e:
            # Persistence is best-effort; the in-memory dataset is still published
            logger.error("%s", e)


def refresh(
    policy: RefreshPolicy,
    store: SnapshotStore,
    adapters: Sequence[SourceAdapter],
    now: Callable[[], str] = utc_now_iso,
) -> Optional[Dataset]:
    return DataRefresher(policy, store, adapters, now=now).run().dataset
