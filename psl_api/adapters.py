# psl_api/adapters.py
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from psl_api.aggregator import process_data, utc_now_iso
from psl_api.config import HARDCODED_UPDATES_ENABLED
from psl_api.cricinfo import CricinfoScraper
from psl_api.default_data import default_dataset
from psl_api.direct_scraper import DirectScraper
from psl_api.hardcoded_updates import apply_hardcoded_updates
from psl_api.http_client import PageFetcher
from psl_api.models import Dataset

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """One origin of PSL data, tried in priority order by the refresher."""

    name: str = "adapter"
    # Result is a standings table to merge into the prior dataset
    partial: bool = False
    # Result is served as-is (no restamp, not persisted)
    fallback: bool = False

    @abstractmethod
    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        """Return a (possibly partial) Dataset, None for "nothing usable", or raise."""
        pass


class HardcodedSnapshotAdapter(SourceAdapter):
    name = "hardcoded"

    def __init__(self, enabled: bool = HARDCODED_UPDATES_ENABLED, now: Callable[[], str] = utc_now_iso) -> None:
        self.enabled = enabled
        self.now = now

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        if not self.enabled:
            return None
        base = prior if prior is not None else default_dataset()
        return apply_hardcoded_updates(base, now_iso=self.now())


class DirectScrapeAdapter(SourceAdapter):
    name = "direct-scrape"
    partial = True

    def __init__(self, scraper: DirectScraper) -> None:
        self.scraper = scraper

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        teams = self.scraper.scrape()
        if not teams:
            return None
        return Dataset(teams=teams)


class PrimarySiteAdapter(SourceAdapter):
    name = "cricinfo"

    def __init__(
        self,
        scraper: CricinfoScraper,
        rng: Optional[random.Random] = None,
        now: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.scraper = scraper
        self.rng = rng or random.Random()
        self.now = now

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        standings = self.scraper.fetch_standings()
        fixtures = self.scraper.fetch_fixtures()
        results = self.scraper.fetch_recent_results()
        return process_data(standings, fixtures, results, self.rng, now_iso=self.now())


class CachedDatasetAdapter(SourceAdapter):
    name = "cache"
    fallback = True

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        if prior is not None:
            logger.info("Using cached PSL data as fallback")
        return prior


class DefaultSnapshotAdapter(SourceAdapter):
    name = "default"
    fallback = True

    def produce(self, prior: Optional[Dataset]) -> Optional[Dataset]:
        logger.info("Using default PSL data (as of May 3, 2025) as fallback")
        return default_dataset()


def build_default_adapters(
    fetcher: Optional[PageFetcher] = None,
    rng: Optional[random.Random] = None,
    hardcoded_enabled: bool = HARDCODED_UPDATES_ENABLED,
) -> List[SourceAdapter]:
    fetcher = fetcher or PageFetcher()
    rng = rng or random.Random()
    return [
        HardcodedSnapshotAdapter(enabled=hardcoded_enabled),
        DirectScrapeAdapter(DirectScraper(fetcher, rng=rng)),
        PrimarySiteAdapter(CricinfoScraper(fetcher), rng=rng),
        CachedDatasetAdapter(),
        DefaultSnapshotAdapter(),
    ]
