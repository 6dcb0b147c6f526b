"""Bounded result cache keyed by exact message text.

Created once when the service starts and owned by the analyzer; it is
never reset implicitly. Eviction is strict FIFO by insertion: reads do
not refresh an entry and re-putting an existing key keeps its slot.
Keys are not normalized, so "Hi" and "hi " are distinct entries.
"""
import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, Optional, TypeVar

from .exceptions import CacheConfigurationError

logger = logging.getLogger(__name__)

V = TypeVar("V")


class ResultCache(Generic[V]):
    """Thread-safe FIFO cache holding at most ``capacity`` entries."""

    def __init__(self, capacity: int = 100):
        """Initialize cache.

        Args:
            capacity: Maximum number of entries (must be a positive int)

        Raises:
            CacheConfigurationError: If capacity is not a positive integer
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            logger.error(
                "RESULT_CACHE_CONFIGURATION_INVALID",
                extra={"capacity": repr(capacity)}
            )
            raise CacheConfigurationError(
                f"Cache capacity must be a positive integer, got {capacity!r}"
            )
        self.capacity = capacity
        self._entries: "OrderedDict[str, V]" = OrderedDict()
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[V]:
        """Return the cached value for ``key`` or None on a miss."""
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: str, value: V) -> None:
        """Store ``value``, evicting the oldest entry when full."""
        with self._lock:
            if key in self._entries:
                self._entries[key] = value
                return
            if len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
                logger.debug(
                    "RESULT_CACHE_EVICTED",
                    extra={"capacity": self.capacity}
                )
            self._entries[key] = value

    def get_or_compute(self, key: str, compute: Callable[[str], V]) -> V:
        """Return the cached value or compute, store and return it.

        ``compute`` runs without the lock held, so distinct keys are
        computed concurrently. Two callers racing on the same key may both
        compute; the first to insert wins and both get its value.
        """
        with self._lock:
            value = self.get(key)
        if value is not None:
            return value

        value = compute(key)

        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_status(self) -> dict:
        """Get cache status for health checks."""
        with self._lock:
            return {
                "capacity": self.capacity,
                "size": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
            }
