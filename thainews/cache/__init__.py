"""
In-memory caching with independent TTL tiers and background expiry sweep.
"""
from .core import CacheEntry, CacheTier
from .keys import build_cache_key, category_namespace
from .ttl_policies import (
    TTL_CONFIG,
    get_ttl_for_tier,
    ttl_overrides_from_settings,
)
from .store import TTLCache
from .manager import CacheManager, build_cache_manager

__all__ = [
    # Core types
    "CacheEntry",
    "CacheTier",
    # Keys
    "build_cache_key",
    "category_namespace",
    # TTL policies
    "TTL_CONFIG",
    "get_ttl_for_tier",
    "ttl_overrides_from_settings",
    # Caches
    "TTLCache",
    "CacheManager",
    "build_cache_manager",
]
