"""
Unit tests for ListCache.
"""

from app.infrastructure.cache.list_cache import ListCache


class TestListCache:
    """Test cases for ListCache."""

    def test_set_and_get(self, clock):
        cache = ListCache(ttl_seconds=60, clock=clock)

        cache.set("proposals:list:tenant-1:s-1", [1, 2])

        assert cache.get("proposals:list:tenant-1:s-1") == [1, 2]
        assert cache.get("proposals:list:tenant-1:s-2") is None

    def test_entries_expire(self, clock):
        cache = ListCache(ttl_seconds=60, clock=clock)
        cache.set("a", "short", ttl_seconds=10)
        cache.set("b", "default")

        clock.advance(seconds=10)
        assert cache.get("a") is None
        assert cache.get("b") == "default"

        clock.advance(seconds=50)
        assert cache.get("b") is None

    def test_invalidate_by_pattern(self, clock):
        cache = ListCache(clock=clock)
        cache.set("proposals:list:tenant-1:s-1", 1)
        cache.set("proposals:list:tenant-1:s-2", 2)
        cache.set("proposals:list:tenant-2:s-1", 3)
        cache.set("companies:list:tenant-1:1", 4)

        removed = cache.invalidate("proposals:list:tenant-1:*")

        assert removed == 2
        assert cache.get("proposals:list:tenant-2:s-1") == 3
        assert cache.get("companies:list:tenant-1:1") == 4
        assert cache.invalidate("proposals:list:tenant-1:*") == 0

    def test_clear(self, clock):
        cache = ListCache(clock=clock)
        cache.set("a", 1)

        cache.clear()

        assert cache.get("a") is None
