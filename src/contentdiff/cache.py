#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/cache.py
"""Evaluation cache port.

Document compilers memoize evaluation results through an injected cache
instead of a process-wide global. The diff engine never touches the cache;
it only passes it through to the compiler the caller configured.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Generic, Optional, Protocol, TypeVar

from contentdiff.constants import DEFAULT_CACHE_MAX_ENTRIES

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EvaluationCache(Protocol[T]):
    """Key/value store used by document compilers."""

    def get(self, key: str) -> Optional[T]: ...

    def put(self, key: str, value: T) -> None: ...


class MemoryCache(Generic[T]):
    """Thread-safe in-memory LRU cache.

    Parameters
    ----------
    max_entries : int, default = 128
        Entries kept before the least recently used one is evicted

    Examples
    --------
        >>> cache = MemoryCache(max_entries=1)
        >>> cache.put("a", 1)
        >>> cache.put("b", 2)
        >>> cache.get("a") is None
        True

    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, T] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            if key not in self._entries:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("evicted cache entry %s", evicted)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "EvaluationCache",
    "MemoryCache",
]
