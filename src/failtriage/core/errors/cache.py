"""Bounded caches backing the classifier.

Two FIFO-evicting maps:
- PatternCache memoizes compiled regexes by source text.
- MatchResultCache memoizes classification results by a lossy message digest.

Eviction is insertion order (oldest first), not LRU: a cache hit does not
refresh an entry. Neither cache is thread-safe; one classifier owns each.
"""

from __future__ import annotations

import re
from collections import OrderedDict
from typing import Any, Generic, TypeVar

from failtriage.core.constants import (
    MATCH_CACHE_KEY_PREFIX_CHARS,
    MAX_MATCH_CACHE_SIZE,
    MAX_PATTERN_CACHE_SIZE,
)

from .models import Classification

K = TypeVar("K")
V = TypeVar("V")


class BoundedFIFOCache(Generic[K, V]):
    """An ordered map that drops its oldest insertion when full."""

    def __init__(self, max_size: int) -> None:
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._entries: OrderedDict[K, V] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: K) -> V | None:
        """Return the cached value or None, counting the hit or miss."""
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: K, value: V) -> None:
        """Insert a value, evicting the oldest entry first when full."""
        if key in self._entries:
            self._entries[key] = value
            return
        if len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
            self.evictions += 1
        self._entries[key] = value

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> dict[str, Any]:
        """Get size and hit/miss counters for diagnostics."""
        return {
            "size": len(self._entries),
            "max_size": self._max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }


class PatternCache(BoundedFIFOCache[str, re.Pattern[str]]):
    """Compiled-regex cache keyed by pattern source text.

    All patterns compile with re.IGNORECASE. compile_count counts actual
    compilations so callers can verify that warm lookups compile nothing.
    """

    def __init__(self, max_size: int = MAX_PATTERN_CACHE_SIZE) -> None:
        super().__init__(max_size)
        self.compile_count = 0

    def get_pattern(self, source: str) -> re.Pattern[str]:
        """Return the compiled pattern for source, compiling it on a miss.

        Raises:
            re.error: If source is not a valid regular expression.
        """
        cached = self.get(source)
        if cached is not None:
            return cached
        compiled = re.compile(source, re.IGNORECASE)
        self.compile_count += 1
        self.put(source, compiled)
        return compiled

    def clear(self) -> None:
        super().clear()
        self.compile_count = 0

    def stats(self) -> dict[str, Any]:
        return {**super().stats(), "compiled": self.compile_count}


class MatchResultCache(BoundedFIFOCache[str, Classification]):
    """Classification-result cache keyed by match_cache_key()."""

    def __init__(self, max_size: int = MAX_MATCH_CACHE_SIZE) -> None:
        super().__init__(max_size)

    def lookup(self, key: str) -> Classification | None:
        return self.get(key)

    def store(self, key: str, value: Classification) -> None:
        self.put(key, value)


def match_cache_key(message: str) -> str:
    """Build the match-result digest for a message.

    The digest is the first 50 characters of the lowercased message plus its
    length. Distinct messages sharing both collide and share a cached result.
    """
    lowered = message.lower()
    return f"{lowered[:MATCH_CACHE_KEY_PREFIX_CHARS]}_{len(lowered)}"
