"""In-memory store for the last successful extraction."""

from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from typing import Iterable, Optional, Tuple

from ..models.drama import DramaModel


@dataclass(frozen=True)
class CacheEntry:
    """An immutable snapshot of one successful extraction."""
    
    records: Tuple[DramaModel, ...]
    fetched_at: datetime


class CacheStore:
    """
    Holds at most one CacheEntry.
    
    Entries are replaced or cleared as a whole under a lock, so a reader always
    gets a record set together with the timestamp it was fetched at.
    """
    
    def __init__(self):
        self._lock = Lock()
        self._entry: Optional[CacheEntry] = None
    
    def read(self) -> Optional[CacheEntry]:
        """Return the current entry, or None if nothing has been cached."""
        with self._lock:
            return self._entry
    
    def write(self, records: Iterable[DramaModel], fetched_at: datetime) -> CacheEntry:
        """Replace the cached entry."""
        entry = CacheEntry(records=tuple(records), fetched_at=fetched_at)
        with self._lock:
            self._entry = entry
        return entry
    
    def clear(self) -> None:
        """Drop the cached entry."""
        with self._lock:
            self._entry = None
