"""
TTL configuration per cache tier.
"""
from typing import Dict, Optional

from .core import CacheTier


# Default TTL by tier (in seconds)
TTL_CONFIG: Dict[CacheTier, int] = {
    CacheTier.ALL_NEWS: 300,      # 5 minutes
    CacheTier.ARTICLE: 1800,      # 30 minutes, articles rarely change once published
    CacheTier.POPULAR: 600,       # 10 minutes
    CacheTier.CATEGORY: 300,      # 5 minutes
}

# Key namespace used by each tier
TIER_ENTITY: Dict[CacheTier, str] = {
    CacheTier.ALL_NEWS: "news",
    CacheTier.ARTICLE: "article",
    CacheTier.POPULAR: "popular",
    CacheTier.CATEGORY: "category",
}


def get_ttl_for_tier(
    tier: CacheTier,
    overrides: Optional[Dict[CacheTier, int]] = None,
) -> int:
    """
    Get the default TTL for a cache tier.

    Args:
        tier: The cache tier
        overrides: Optional per-tier TTLs taking precedence over TTL_CONFIG

    Returns:
        TTL in seconds
    """
    if overrides and tier in overrides:
        return overrides[tier]
    return TTL_CONFIG[tier]


def ttl_overrides_from_settings(settings) -> Dict[CacheTier, int]:
    """Map the cache_ttl_* settings onto tiers."""
    return {
        CacheTier.ALL_NEWS: settings.cache_ttl_all_news,
        CacheTier.ARTICLE: settings.cache_ttl_article,
        CacheTier.POPULAR: settings.cache_ttl_popular,
        CacheTier.CATEGORY: settings.cache_ttl_category,
    }
