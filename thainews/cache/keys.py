"""
Cache key generation.

Keys are human-readable and deterministic:

    news                         all-news listing, default query
    news?limit=50&offset=0       all-news listing, paginated
    article:42                   one article
    category:politics?limit=10   category listing

Two logically equal queries always produce the same key, whatever the order
the parameters were passed in.
"""
from typing import Any, Optional
from urllib.parse import quote

SCOPE_SEPARATOR = ":"
QUERY_SEPARATOR = "?"


def _encode(value: Any) -> str:
    """Percent-encode a key segment so separators never leak into it."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def category_namespace(category: str, entity: str = "category") -> str:
    """Prefix shared by every key of one category."""
    return f"{entity}{SCOPE_SEPARATOR}{_encode(category)}"


def build_cache_key(entity: str, scope: Optional[Any] = None, **params: Any) -> str:
    """
    Build a cache key from entity type, optional scope and query parameters.

    Args:
        entity: Entity type namespace ("news", "article", "popular", "category")
        scope: Optional sub-namespace (category slug, article id)
        **params: Query parameters; None values are ignored

    Returns:
        Deterministic key string
    """
    key = _encode(entity)
    if scope is not None:
        key = f"{key}{SCOPE_SEPARATOR}{_encode(scope)}"

    sorted_params = sorted((k, v) for k, v in params.items() if v is not None)
    if sorted_params:
        query = "&".join(f"{_encode(k)}={_encode(v)}" for k, v in sorted_params)
        key = f"{key}{QUERY_SEPARATOR}{query}"
    return key


def key_in_namespace(key: str, namespace: str) -> bool:
    """True if key is the namespace itself or one of its parameterised queries."""
    return key == namespace or key.startswith(namespace + QUERY_SEPARATOR)
