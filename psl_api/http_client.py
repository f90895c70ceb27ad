# psl_api/http_client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import quote

import requests

from psl_api.config import HTTP_TIMEOUT_SECONDS, PROXY_URL_TEMPLATES
from psl_api.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; PSL-Stats/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-PK,en;q=0.9",
}


@dataclass(frozen=True)
class FetchedPage:
    url: str
    status: int
    content_type: str
    text: str
    via_proxy: Optional[str] = None


def build_proxied_url(template: str, url: str) -> str:
    return f"{template}{quote(url, safe='')}"


class PageFetcher:
    """
    GET a page directly; on failure retry through the indirection layer.

    Proxies are tried starting from the last one that worked, each at most
    once per call. Any non-2xx status counts as a failure.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        proxy_templates: Sequence[str] = PROXY_URL_TEMPLATES,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self.session = session or requests.Session()
        self.proxy_templates: List[str] = list(proxy_templates)
        self.timeout = timeout
        self.last_successful_proxy = 0

    def _get(self, url: str) -> requests.Response:
        r = self.session.get(url, timeout=self.timeout, headers=DEFAULT_HEADERS, allow_redirects=True)
        r.raise_for_status()
        return r

    @staticmethod
    def _page(url: str, r: requests.Response, via_proxy: Optional[str] = None) -> FetchedPage:
        return FetchedPage(
            url=url,
            status=r.status_code,
            content_type=r.headers.get("Content-Type", ""),
            text=r.text,
            via_proxy=via_proxy,
        )

    def fetch_direct(self, url: str) -> FetchedPage:
        try:
            return self._page(url, self._get(url))
        except requests.RequestException as e:
            raise FetchError(f"Direct fetch failed for {url}: {e}") from e

    def fetch_via_proxy(self, url: str) -> FetchedPage:
        if not self.proxy_templates:
            raise FetchError(f"No proxy configured for {url}")

        n = len(self.proxy_templates)
        start = self.last_successful_proxy % n
        errors: List[str] = []

        for offset in range(n):
            idx = (start + offset) % n
            template = self.proxy_templates[idx]
            logger.info("Attempting to fetch %s via proxy %s", url, template)
            try:
                r = self._get(build_proxied_url(template, url))
            except requests.RequestException as e:
                logger.warning("Proxy %s failed: %s", idx, e)
                errors.append(f"{template}: {e}")
                continue

            self.last_successful_proxy = idx
            return self._page(url, r, via_proxy=template)

        raise FetchError(f"All proxies failed for {url}: {'; '.join(errors)}")

    def fetch(self, url: str) -> FetchedPage:
        try:
            return self.fetch_direct(url)
        except FetchError as e:
            logger.warning("%s; trying via proxy", e)
        return self.fetch_via_proxy(url)

    def fetch_text(self, url: str) -> str:
        return self.fetch(url).text
