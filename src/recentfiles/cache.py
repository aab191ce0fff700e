"""In-memory cache for commit metadata fetched from git."""

import threading
from typing import Callable, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class CommitMetadataCache:
    """Write-once store of raw git output keyed by operation and commit hash.

    The cache is created by the caller and handed to the commits that use it,
    so separate runs (and tests) never share state implicitly. Entries are
    never evicted.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

        # Stats
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(namespace: str, commit_hash: str) -> str:
        """Generate cache key for an operation on a commit.

        Args:
            namespace: Operation name (e.g. "commit_time")
            commit_hash: Commit hash

        Returns:
            Cache key
        """
        return f"{namespace}-{commit_hash}"

    def get(self, key: str) -> Optional[str]:
        """Get a cached payload.

        Args:
            key: Cache key

        Returns:
            Cached payload or None
        """
        with self._lock:
            payload = self._entries.get(key)
            if payload is None:
                self.misses += 1
            else:
                self.hits += 1
            return payload

    def get_or_fetch(self, key: str, fetch: Callable[[], str]) -> str:
        """Return the cached payload for ``key``, fetching and storing it on a miss.

        A populated key is never overwritten and ``fetch`` is not called for it
        again. Errors raised by ``fetch`` propagate and leave the key empty.

        Args:
            key: Cache key
            fetch: Zero-argument callable producing the raw payload

        Returns:
            Raw payload
        """
        with self._lock:
            payload = self._entries.get(key)
            if payload is not None:
                self.hits += 1
                logger.debug("cache_hit", key=key)
                return payload

            self.misses += 1
            payload = fetch()
            self._entries[key] = payload
            return payload

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
            "entries": len(self._entries),
        }
