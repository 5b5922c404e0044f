"""
Core cache data structures.
"""
from dataclasses import dataclass
from typing import Any
from enum import Enum


class CacheTier(Enum):
    """Independent caches, one per data shape served by the news pages."""
    ALL_NEWS = "all_news"     # Full article listing
    ARTICLE = "article"       # Single article by id
    POPULAR = "popular"       # Most-viewed listing
    CATEGORY = "category"     # Per-category listings


@dataclass
class CacheEntry:
    """
    A cached value with its absolute expiry time.

    `expires_at` is measured on the owning cache's clock, so entries are only
    comparable against the cache that created them.
    """
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """An entry is live strictly before its expiry instant."""
        return now >= self.expires_at

    def remaining(self, now: float) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self.expires_at - now)
