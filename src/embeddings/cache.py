# src/embeddings/cache.py - v1
"""In-memory TTL cache for embedding results.

Entries are keyed by ``model:normalized_text`` and evicted lazily on lookup
once ``now - inserted_at >= ttl``; there is no background sweep. Access is
guarded by a lock so a single cache can be shared across threads. The clock
is injectable for deterministic tests.
"""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel

from originality_guard.embeddings.models import EmbeddingResult

DEFAULT_TTL_S = 24 * 60 * 60


def normalize_text(text: str) -> str:
    """Normalization applied to text before building a cache key."""
    return text.strip().lower()


def make_cache_key(model: str, text: str) -> str:
    return f"{model}:{normalize_text(text)}"


@dataclass(frozen=True)
class CachedEmbedding:
    """Stored result with its insertion time (epoch seconds) and TTL."""

    result: EmbeddingResult
    inserted_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.inserted_at >= self.ttl


class CacheStats(BaseModel):
    """Operational snapshot of the cache."""

    approx_size_bytes: int
    entry_count: int
    oldest_entry_timestamp: float | None = None
    newest_entry_timestamp: float | None = None


class EmbeddingCache:
    """Thread-safe TTL map from cache key to EmbeddingResult."""

    def __init__(
        self,
        ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_s
        self._clock = clock
        self._entries: dict[str, CachedEmbedding] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> EmbeddingResult | None:
        """Return a live entry, evicting it first if it has expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry.result

    def put(self, key: str, result: EmbeddingResult, ttl_s: float | None = None) -> None:
        with self._lock:
            self._entries[key] = CachedEmbedding(
                result=result,
                inserted_at=self._clock(),
                ttl=self._ttl if ttl_s is None else ttl_s,
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> CacheStats:
        """Entry count, serialized size estimate and timestamp range."""
        with self._lock:
            entries = dict(self._entries)

        timestamps = [e.inserted_at for e in entries.values()]
        serialized = {
            key: {
                "result": e.result.model_dump(),
                "timestamp": e.inserted_at,
                "ttl": e.ttl,
            }
            for key, e in entries.items()
        }
        return CacheStats(
            approx_size_bytes=len(json.dumps(serialized)),
            entry_count=len(entries),
            oldest_entry_timestamp=min(timestamps) if timestamps else None,
            newest_entry_timestamp=max(timestamps) if timestamps else None,
        )


_default_cache = EmbeddingCache()


def get_default_cache() -> EmbeddingCache:
    """Process-wide cache shared by clients built without an explicit cache."""
    return _default_cache


def clear_cache() -> None:
    """Empty the process-wide cache."""
    _default_cache.clear()


def cache_stats() -> CacheStats:
    """Stats for the process-wide cache."""
    return _default_cache.stats()
