"""HTTP adapter for the brokerage's public listings page."""

from __future__ import annotations

import requests

from railey_listings.config import Settings
from railey_listings.utils.log import get_logger

from .errors import NetworkFailure

log = get_logger(__name__)


class ListingSource:
    """Fetch raw listings HTML with a browser-like user agent and a hard timeout."""

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or Settings()
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def fetch(self) -> str:
        url = self.settings.source_url
        try:
            resp = self._session.get(url, headers=self._headers(), timeout=self.settings.http_timeout_secs)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise NetworkFailure(f"GET {url} failed: {e}") from e
        log.info("Fetched %s (%d characters)", url, len(resp.text))
        return resp.text
