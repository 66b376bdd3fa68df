"""
In-memory TTL store for analysis results

Owned by the caller (e.g. a chat front end keyed by session id); the
engine itself never reads or writes it.
"""

import logging
import threading
import time
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisResultStore(Generic[T]):
    """
    Keyed store whose entries expire ttl_seconds after they were put.

    Expired entries are dropped lazily on access and by purge_expired().
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is None:
            from kualitas_shared.config.settings import get_settings

            ttl_seconds = get_settings().cache.analysis_ttl_seconds
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[Hashable, Tuple[float, T]] = {}

    def put(self, key: Hashable, result: T) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), result)

    def get(self, key: Hashable) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, result = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                logger.debug(f"Analysis for {key!r} expired")
                return None
            return result

    def pop(self, key: Hashable) -> Optional[T]:
        result = self.get(key)
        with self._lock:
            self._entries.pop(key, None)
        return result

    def purge_expired(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                key for key, (stored_at, _) in self._entries.items()
                if now - stored_at > self.ttl_seconds
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
