"""Process-wide cache of the bulk name index (TTL with stale-read fallback)."""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from pokedex.aggregation.pokemon_models import NameIndexEntry
from pokedex.errors import IndexUnavailable
from pokedex.retrieval.client import UpstreamClient
from pokedex.utils.logging import get_logger
from pokedex.utils.time import EPOCH, timestamp_to_utc_z

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60
DEFAULT_INDEX_LIMIT = 1500


@dataclass(frozen=True)
class IndexCacheEntry:
    entries: Tuple[NameIndexEntry, ...] = ()
    fetched_at: float = EPOCH
    populated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.populated


@dataclass
class NameIndexCache:
    """Holds the full name index for the lifetime of the process.

    A refresh failure never discards data: if any earlier fetch succeeded its
    entries are served, however old. Concurrent refreshes are allowed to
    duplicate upstream work; the lock only guards the swap.
    """

    client: UpstreamClient
    ttl_seconds: float = DEFAULT_TTL_SECONDS
    index_limit: int = DEFAULT_INDEX_LIMIT
    clock: Callable[[], float] = time.time
    _entry: IndexCacheEntry = field(default_factory=IndexCacheEntry, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _force_refresh: bool = field(default=False, init=False, repr=False)

    def _is_fresh(self, entry: IndexCacheEntry, now: float) -> bool:
        if entry.is_empty or self._force_refresh:
            return False
        return (now - entry.fetched_at) < self.ttl_seconds

    def get_index(self) -> Tuple[NameIndexEntry, ...]:
        """
        Return the name index, refreshing it when the TTL has lapsed.

        Returns:
            Tuple of NameIndexEntry in upstream order

        Raises:
            IndexUnavailable: If no fetch has ever succeeded and this one fails
        """
        entry = self._entry
        now = self.clock()
        if self._is_fresh(entry, now):
            logger.debug(f"Name index cache hit ({len(entry.entries)} entries)")
            return entry.entries

        logger.info("Name index cache miss or expired, fetching from upstream")
        outcome = self.client.fetch_json(self.client.index_url(self.index_limit))
        entries: Optional[Tuple[NameIndexEntry, ...]] = None
        failure = None
        if outcome.ok:
            try:
                entries = _parse_index(outcome.data)
            except (KeyError, TypeError, ValueError) as e:
                failure = f"malformed index payload: {e}"
        else:
            failure = outcome.error.message

        if entries is not None:
            with self._lock:
                self._entry = IndexCacheEntry(entries=entries, fetched_at=now, populated=True)
                self._force_refresh = False
            logger.info(f"Fetched and cached {len(entries)} names")
            return entries

        # Re-read: another request may have refreshed while we were fetching
        previous = self._entry
        if not previous.is_empty:
            logger.warning(f"Index refresh failed ({failure}); serving stale copy from {timestamp_to_utc_z(previous.fetched_at)}")
            return previous.entries

        logger.error(f"Index refresh failed with no cached copy: {failure}")
        raise IndexUnavailable(f"Name index unavailable: {failure}")

    def invalidate(self) -> None:
        """Expire the cached entry while keeping it for stale reads."""
        with self._lock:
            self._force_refresh = True

    def status(self) -> Dict:
        """Diagnostic snapshot of the cache."""
        entry = self._entry
        now = self.clock()
        age = None if entry.is_empty else round(now - entry.fetched_at, 3)
        return {
            "entryCount": len(entry.entries),
            "fetchedAt": timestamp_to_utc_z(entry.fetched_at),
            "ageSeconds": age,
            "fresh": self._is_fresh(entry, now),
        }


def _parse_index(payload: Dict) -> Tuple[NameIndexEntry, ...]:
    results = payload["results"]
    return tuple(NameIndexEntry(name=item["name"], resource_url=item["url"]) for item in results)
