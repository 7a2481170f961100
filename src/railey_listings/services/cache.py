"""Read-through cache for extracted listings with stale-on-error fallback."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Tuple

from railey_listings.models import RawListing
from railey_listings.utils.log import get_logger

from .errors import ExtractionEmpty, ExtractionError, ScrapeError
from .extractors import Extractor
from .fallback import get_fallback
from .source import ListingSource

log = get_logger(__name__)

DEFAULT_TTL_SECS = 30 * 60


class ListingCache:
    """Holds the last successful extraction and its fetch time.

    - ``get_listings`` never raises: within the TTL it returns the cached
      tuple untouched; after it, it re-extracts and on any failure serves
      the stale tuple, or the fallback set when nothing was ever cached.
    - ``refresh`` always extracts and raises the ``ScrapeError`` on failure.
    - Concurrent refreshes are not coalesced; the last successful one wins.
    """

    def __init__(
        self,
        source: ListingSource,
        extractor: Extractor,
        ttl_secs: float = DEFAULT_TTL_SECS,
        fallback: Callable[[], Tuple[RawListing, ...]] = get_fallback,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.extractor = extractor
        self.ttl_secs = ttl_secs
        self._fallback = fallback
        self._clock = clock
        self._lock = threading.Lock()
        self._listings: Tuple[RawListing, ...] = ()
        self._fetched_at: Optional[float] = None

    @property
    def last_fetched(self) -> Optional[float]:
        return self._fetched_at

    @property
    def cached(self) -> Tuple[RawListing, ...]:
        return self._listings

    def is_fresh(self) -> bool:
        with self._lock:
            return self._is_fresh_locked()

    def _is_fresh_locked(self) -> bool:
        if self._fetched_at is None or not self._listings:
            return False
        return self._clock() - self._fetched_at < self.ttl_secs

    def get_listings(self) -> Tuple[RawListing, ...]:
        with self._lock:
            if self._is_fresh_locked():
                log.debug("Serving %d cached listings", len(self._listings))
                return self._listings
        try:
            return self.refresh()
        except ScrapeError as e:
            log.warning("Listing extraction failed (%s: %s)", type(e).__name__, e)
        except Exception:
            log.exception("Unexpected error during listing extraction")
        with self._lock:
            if self._listings:
                log.info("Serving %d stale cached listings", len(self._listings))
                return self._listings
        fallback = self._fallback()
        log.info("Serving %d fallback listings", len(fallback))
        return fallback

    def refresh(self) -> Tuple[RawListing, ...]:
        try:
            html = self.source.fetch()
            records = tuple(self.extractor.extract(html))
        except ScrapeError:
            raise
        except Exception as e:
            log.exception("Unexpected failure in %s extractor", self.extractor.name)
            raise ExtractionError(f"{self.extractor.name} extractor failed: {e}") from e
        if not records:
            raise ExtractionEmpty(f"{self.extractor.name} extractor found no listings")
        with self._lock:
            self._listings = records
            self._fetched_at = self._clock()
        log.info("Cached %d listings from %s extractor", len(records), self.extractor.name)
        return records
