"""
Single-tier in-memory TTL cache.

Expired entries are never returned: reads check expiry lazily, and `sweep()`
evicts them proactively. Cache operations never raise; any internal failure
is logged and degrades to a miss.
"""
import threading
import time
import logging
from functools import wraps
from typing import Dict, Optional, Callable, Any, List

from .core import CacheEntry
from .keys import category_namespace, key_in_namespace

logger = logging.getLogger("cache.store")

_MISSING = object()


def _never_raise(default: Any = None, default_factory: Optional[Callable[[], Any]] = None):
    """Log and swallow failures inside cache operations.

    Mutable fallbacks go through `default_factory` so each failure gets a
    fresh object.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except Exception as e:
                logger.warning(f"Cache {self.name}: {fn.__name__} failed: {e}")
                return default_factory() if default_factory else default
        return wrapper
    return decorator


class TTLCache:
    """
    Thread-safe key/value cache with per-entry expiry.

    Usage:
        cache = TTLCache("news", default_ttl=300)
        cache.set("news?limit=10", items)
        items = cache.get("news?limit=10")  # None once 300s have passed
    """

    def __init__(
        self,
        name: str,
        default_ttl: float,
        entity: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ):
        """
        Initialize the cache.

        Args:
            name: Name used in logs and stats
            default_ttl: TTL in seconds applied when set() gets no override
            entity: Key namespace used for category invalidation (defaults to name)
            clock: Monotonic time source, injectable for tests
            enabled: When False, set() stores nothing and every read misses
        """
        self.name = name
        self.entity = entity or name
        self.default_ttl = default_ttl
        self._clock = clock
        self.enabled = enabled
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "evictions": 0,
        }

    def _lookup(self, key: str) -> Any:
        """Return the live value or _MISSING, dropping an expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return _MISSING
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats["evictions"] += 1
                self._stats["misses"] += 1
                return _MISSING
            self._stats["hits"] += 1
            return entry.value

    @_never_raise(default=None)
    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns:
            The value if present and unexpired, else None
        """
        value = self._lookup(key)
        if value is _MISSING:
            logger.debug(f"CACHE MISS [{self.name}]: {key}")
            return None
        logger.debug(f"CACHE HIT [{self.name}]: {key}")
        return value

    @_never_raise(default=False)
    def contains(self, key: str) -> bool:
        """True if key holds a live entry. Does not touch hit/miss stats."""
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    @_never_raise(default=None)
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Store a value, replacing any existing entry for the key.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Seconds to keep the value; defaults to the cache's TTL
        """
        if not self.enabled:
            return
        ttl = self.default_ttl if ttl is None else ttl
        entry = CacheEntry(value=value, expires_at=self._clock() + ttl)
        with self._lock:
            self._entries[key] = entry
            self._stats["sets"] += 1

    def get_or_load(
        self,
        key: str,
        loader: Callable[[], Any],
        ttl: Optional[float] = None,
    ) -> Any:
        """
        Read-through helper: return the cached value or load and store it.

        Errors raised by `loader` propagate; nothing is cached in that case.
        """
        value = self._safe_lookup(key)
        if value is not _MISSING:
            return value
        logger.info(f"CACHE MISS [{self.name}]: {key}, loading")
        value = loader()
        self.set(key, value, ttl)
        return value

    @_never_raise(default=_MISSING)
    def _safe_lookup(self, key: str) -> Any:
        return self._lookup(key)

    @_never_raise(default=None)
    def invalidate(self, key: str) -> None:
        """Remove one entry. No-op if absent."""
        with self._lock:
            if self._entries.pop(key, None) is not None:
                logger.info(f"Invalidated [{self.name}]: {key}")

    @_never_raise(default=None)
    def invalidate_by_category_prefix(self, category: str) -> None:
        """
        Remove every entry in a category's key namespace.

        Only keys of the exact category segment match: invalidating
        "politics" leaves "politics-world" untouched.
        """
        namespace = category_namespace(category, entity=self.entity)
        with self._lock:
            to_delete = [k for k in self._entries if key_in_namespace(k, namespace)]
            for key in to_delete:
                del self._entries[key]
        if to_delete:
            logger.info(
                f"Invalidated {len(to_delete)} [{self.name}] entries for category '{category}'"
            )

    @_never_raise(default=None)
    def invalidate_all(self) -> None:
        """Clear all entries."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} [{self.name}] entries")

    @_never_raise(default=0)
    def sweep(self) -> int:
        """
        Evict expired entries.

        Returns:
            Number of entries evicted
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._stats["evictions"] += len(expired)
        if expired:
            logger.debug(f"Swept {len(expired)} expired [{self.name}] entries")
        return len(expired)

    @_never_raise(default_factory=list)
    def keys(self) -> List[str]:
        """Keys of live entries."""
        with self._lock:
            now = self._clock()
            return [k for k, e in self._entries.items() if not e.is_expired(now)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            lookups = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / lookups * 100) if lookups > 0 else 0

            return {
                "name": self.name,
                "entries": len(self._entries),
                "enabled": self.enabled,
                "default_ttl": self.default_ttl,
                "hits": self._stats["hits"],
                "misses": self._stats["misses"],
                "sets": self._stats["sets"],
                "evictions": self._stats["evictions"],
                "hit_rate_percent": round(hit_rate, 1),
            }
