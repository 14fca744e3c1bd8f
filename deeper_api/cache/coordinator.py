"""Cache refresh policy: serve fresh cache, refresh when stale, fall back on failure."""

import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, List, Literal, Optional

from ..constants.source import CACHE_TTL_SECONDS
from ..errors import BlockedError, DeeperApiError, FetchError, NoDataAvailable, ParseError
from ..models.drama import DramaModel
from .store import CacheEntry, CacheStore

Source = Literal["cache", "live", "stale_fallback"]
Scraper = Callable[[], Awaitable[List[DramaModel]]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RecordsResult:
    """Records served to a caller, and where they came from."""
    
    records: List[DramaModel]
    source: Source
    fetched_at: Optional[datetime]
    error: Optional[DeeperApiError] = None


@dataclass(frozen=True)
class CacheStatus:
    populated: bool
    fetched_at: Optional[datetime]
    total_items: int


def describe_failure(error: Exception) -> str:
    """Human-readable reason for a failed refresh."""
    if isinstance(error, BlockedError):
        return f"The source site blocked the request (edge protection): {error}"
    if isinstance(error, FetchError):
        return f"Failed to fetch data from the source site: {error}"
    if isinstance(error, ParseError):
        return f"Failed to parse the source page: {error}"
    return str(error)


class RefreshCoordinator:
    """
    Decides between serving the cache and running the scraper.
    
    Concurrent requests that both find the cache stale both run the scraper;
    whichever finishes last overwrites the cache.
    """
    
    def __init__(
        self,
        scraper: Scraper,
        store: Optional[CacheStore] = None,
        ttl: timedelta = timedelta(seconds=CACHE_TTL_SECONDS),
        clock: Callable[[], datetime] = utc_now,
    ):
        self.scraper = scraper
        self.store = store if store is not None else CacheStore()
        self.ttl = ttl
        self.clock = clock
    
    def is_fresh(self, entry: Optional[CacheEntry], now: datetime) -> bool:
        return entry is not None and now - entry.fetched_at < self.ttl
    
    async def _refresh(self, now: datetime) -> CacheEntry:
        records = await self.scraper()
        return self.store.write(records, now)
    
    async def get_records(self) -> RecordsResult:
        """
        Serve records for the listing endpoint.
        
        Returns:
            RecordsResult with source "cache" (fresh), "live" (just refreshed)
            or "stale_fallback" (refresh failed, expired cache served)
            
        Raises:
            NoDataAvailable: If the refresh failed and nothing is cached
        """
        now = self.clock()
        entry = self.store.read()
        
        if self.is_fresh(entry, now):
            return RecordsResult(list(entry.records), "cache", entry.fetched_at)
        
        try:
            fresh = await self._refresh(now)
        except (FetchError, ParseError) as e:
            if entry is None:
                raise NoDataAvailable(describe_failure(e)) from e
            print(f"Refresh failed, serving cache from {entry.fetched_at.isoformat()}: {e}", file=sys.stderr)
            return RecordsResult(list(entry.records), "stale_fallback", entry.fetched_at, error=e)
        
        return RecordsResult(list(fresh.records), "live", fresh.fetched_at)
    
    async def ensure_records(self) -> RecordsResult:
        """
        Return whatever is cached regardless of age, scraping only if the cache
        has never been populated.
        
        Raises:
            NoDataAvailable: If the cache is empty and the scrape fails
        """
        entry = self.store.read()
        if entry is not None:
            return RecordsResult(list(entry.records), "cache", entry.fetched_at)
        
        try:
            fresh = await self._refresh(self.clock())
        except (FetchError, ParseError) as e:
            raise NoDataAvailable(describe_failure(e)) from e
        return RecordsResult(list(fresh.records), "live", fresh.fetched_at)
    
    async def search(self, query: str) -> List[DramaModel]:
        """Case-insensitive substring match on title and summary."""
        needle = query.strip().lower()
        result = await self.ensure_records()
        return [
            record for record in result.records
            if needle in record.title.lower() or needle in record.summary.lower()
        ]
    
    def clear(self) -> None:
        self.store.clear()
    
    def status(self) -> CacheStatus:
        entry = self.store.read()
        if entry is None:
            return CacheStatus(populated=False, fetched_at=None, total_items=0)
        return CacheStatus(populated=True, fetched_at=entry.fetched_at, total_items=len(entry.records))
