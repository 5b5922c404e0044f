"""
Tests for cache key generation.
"""
from thainews.cache import build_cache_key, category_namespace


def test_entity_only():
    assert build_cache_key("news") == "news"


def test_scope_and_params_are_readable():
    assert build_cache_key("category", "politics", limit=10) == "category:politics?limit=10"
    assert build_cache_key("article", 42) == "article:42"


def test_param_order_does_not_matter():
    """Logically equal queries produce identical keys."""
    a = build_cache_key("news", limit=50, offset=0)
    b = build_cache_key("news", offset=0, limit=50)
    assert a == b == "news?limit=50&offset=0"


def test_none_params_are_dropped():
    assert build_cache_key("news", limit=None) == build_cache_key("news")


def test_distinct_queries_do_not_collide():
    keys = {
        build_cache_key("news"),
        build_cache_key("news", limit=10),
        build_cache_key("news", limit=100),
        build_cache_key("category", "a", b="c"),
        build_cache_key("category", "a?b=c"),
        build_cache_key("category", "a:b"),
        build_cache_key("popular", featured=True),
        build_cache_key("popular", featured="true2"),
    }
    assert len(keys) == 8


def test_separators_in_values_are_encoded():
    key = build_cache_key("category", "a?b=c")
    assert key == "category:a%3Fb%3Dc"


def test_category_namespace_matches_scoped_keys():
    key = build_cache_key("category", "sports", limit=5)
    assert key.startswith(category_namespace("sports") + "?")
