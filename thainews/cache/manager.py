"""
Cache orchestration across the news tiers, with a background expiry sweep.
"""
import threading
import time
import logging
from typing import Dict, Optional, Callable, Any, List

from .core import CacheTier
from .keys import build_cache_key
from .store import TTLCache
from .ttl_policies import TIER_ENTITY, get_ttl_for_tier, ttl_overrides_from_settings

logger = logging.getLogger("cache.manager")


class CacheManager:
    """
    Owns one TTLCache per tier and sweeps expired entries on a timer.

    Create one instance at process start and pass it to whatever serves
    article data; call start() to run the sweep and stop() on shutdown.
    """

    def __init__(
        self,
        ttl_overrides: Optional[Dict[CacheTier, int]] = None,
        sweep_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ):
        """
        Initialize the cache manager.

        Args:
            ttl_overrides: Per-tier default TTLs replacing TTL_CONFIG values
            sweep_interval: Seconds between background sweeps
            clock: Time source shared by all tiers
            enabled: False turns every tier into a pass-through that stores nothing
        """
        self._tiers: Dict[CacheTier, TTLCache] = {
            tier: TTLCache(
                name=tier.value,
                default_ttl=get_ttl_for_tier(tier, ttl_overrides),
                entity=TIER_ENTITY[tier],
                clock=clock,
                enabled=enabled,
            )
            for tier in CacheTier
        }
        self.sweep_interval = sweep_interval
        self.enabled = enabled

        # Background sweep
        self._sweep_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._sweep_lock = threading.Lock()
        self._sweeps = 0

    def tier(self, tier: CacheTier) -> TTLCache:
        """Get the cache for a tier."""
        return self._tiers[tier]

    # =========================================================================
    # Generic operations
    # =========================================================================

    def get(self, tier: CacheTier, key: str) -> Optional[Any]:
        return self._tiers[tier].get(key)

    def set(self, tier: CacheTier, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._tiers[tier].set(key, value, ttl)

    def invalidate(self, tier: CacheTier, key: str) -> None:
        self._tiers[tier].invalidate(key)

    def invalidate_by_category_prefix(self, category: str) -> None:
        """Drop every cached listing for a category."""
        self._tiers[CacheTier.CATEGORY].invalidate_by_category_prefix(category)

    def invalidate_all(self, tier: Optional[CacheTier] = None) -> None:
        """
        Clear one tier, or every tier when none is given.

        Used after mutations whose blast radius is not precisely known,
        e.g. a bulk import.
        """
        tiers = [tier] if tier is not None else list(self._tiers)
        for t in tiers:
            self._tiers[t].invalidate_all()

    def sweep(self) -> int:
        """Evict expired entries in every tier. Returns total evicted."""
        evicted = sum(cache.sweep() for cache in self._tiers.values())
        self._sweeps += 1
        return evicted

    # =========================================================================
    # News helpers
    # =========================================================================

    def cache_news(self, news: List[Any], category: Optional[str] = None, **params: Any) -> None:
        """Cache a news listing, per category when one is given."""
        if category:
            self.set(CacheTier.CATEGORY, build_cache_key("category", category, **params), news)
        else:
            self.set(CacheTier.ALL_NEWS, build_cache_key("news", **params), news)

    def get_cached_news(self, category: Optional[str] = None, **params: Any) -> Optional[List[Any]]:
        if category:
            return self.get(CacheTier.CATEGORY, build_cache_key("category", category, **params))
        return self.get(CacheTier.ALL_NEWS, build_cache_key("news", **params))

    def cache_article(self, article_id: Any, article: Any) -> None:
        self.set(CacheTier.ARTICLE, build_cache_key("article", article_id), article)

    def get_cached_article(self, article_id: Any) -> Optional[Any]:
        return self.get(CacheTier.ARTICLE, build_cache_key("article", article_id))

    def cache_popular_news(self, news: List[Any], **params: Any) -> None:
        self.set(CacheTier.POPULAR, build_cache_key("popular", **params), news)

    def get_cached_popular_news(self, **params: Any) -> Optional[List[Any]]:
        return self.get(CacheTier.POPULAR, build_cache_key("popular", **params))

    def invalidate_news_cache(self) -> None:
        """Drop every listing (all-news, category and popular). Articles stay."""
        for tier in (CacheTier.ALL_NEWS, CacheTier.CATEGORY, CacheTier.POPULAR):
            self._tiers[tier].invalidate_all()

    def invalidate_article(self, article_id: Any, category: Optional[str] = None) -> None:
        """
        Invalidate everything an article change can affect.

        Removes the article entry, its category's listings, the all-news
        listings and the popular listings.
        """
        self.invalidate(CacheTier.ARTICLE, build_cache_key("article", article_id))
        if category:
            self.invalidate_by_category_prefix(category)
        self.invalidate_all(CacheTier.ALL_NEWS)
        self.invalidate_all(CacheTier.POPULAR)

    # =========================================================================
    # Background sweep
    # =========================================================================

    def start(self) -> None:
        """Start the background sweep thread. No-op if already running."""
        with self._sweep_lock:
            if self._sweep_thread is not None and self._sweep_thread.is_alive():
                return
            self._stop_event.clear()
            self._sweep_thread = threading.Thread(
                target=self._sweep_loop,
                name="cache-sweep",
                daemon=True,
            )
            self._sweep_thread.start()
        logger.info(f"Cache sweep started (every {self.sweep_interval}s)")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the background sweep thread. No-op if not running."""
        with self._sweep_lock:
            thread = self._sweep_thread
            self._sweep_thread = None
        if thread is None:
            return
        self._stop_event.set()
        thread.join(timeout=timeout)
        logger.info("Cache sweep stopped")

    @property
    def is_sweeping(self) -> bool:
        thread = self._sweep_thread
        return thread is not None and thread.is_alive()

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self.sweep_interval):
            try:
                evicted = self.sweep()
                if evicted:
                    logger.debug(f"Background sweep evicted {evicted} entries")
            except Exception as e:
                logger.warning(f"Background sweep failed: {e}")

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics for every tier."""
        tiers = {tier.value: cache.get_stats() for tier, cache in self._tiers.items()}
        return {
            "enabled": self.enabled,
            "entries": sum(t["entries"] for t in tiers.values()),
            "sweeps": self._sweeps,
            "sweeping": self.is_sweeping,
            "sweep_interval": self.sweep_interval,
            "tiers": tiers,
        }


def build_cache_manager(settings) -> CacheManager:
    """Create a CacheManager configured from settings."""
    return CacheManager(
        ttl_overrides=ttl_overrides_from_settings(settings),
        sweep_interval=settings.cache_sweep_interval_seconds,
        enabled=settings.cache_enabled,
    )
