"""
Tests for BumpBoard Render Cache
"""

import pytest

from bumpboard.core.render_cache import RenderCache


class TestRenderCache:
    """Tests for RenderCache class."""

    def setup_method(self):
        self.cache = RenderCache(max_entries=2)

    def test_miss_then_hit(self):
        """A stored render is returned on the next get."""
        assert self.cache.get("b", 1) is None
        assert self.cache.put("b", 1, "<p>one</p>")
        assert self.cache.get("b", 1) == "<p>one</p>"

        stats = self.cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_keys_scoped_by_board(self):
        """The same id on two boards is two entries."""
        self.cache.put("a", 1, "A")
        self.cache.put("b", 1, "B")

        assert self.cache.get("a", 1) == "A"
        assert self.cache.get("b", 1) == "B"

    def test_evicts_by_insertion_order(self):
        """The first inserted entry goes first, even if it was just read."""
        self.cache.put("b", 1, "one")
        self.cache.put("b", 2, "two")
        self.cache.get("b", 1)
        self.cache.put("b", 3, "three")

        assert ("b", 1) not in self.cache
        assert ("b", 2) in self.cache
        assert ("b", 3) in self.cache
        assert self.cache.get_stats()["evictions"] == 1

    def test_bound_is_global(self):
        """Inserts on one board can evict another board's entries."""
        self.cache.put("quiet", 1, "hot page")
        self.cache.put("busy", 1, "x")
        self.cache.put("busy", 2, "y")

        assert ("quiet", 1) not in self.cache
        assert len(self.cache) == 2

    def test_invalidate(self):
        """invalidate() removes the entry and reports whether it existed."""
        self.cache.put("b", 1, "one")

        assert self.cache.invalidate("b", 1) is True
        assert self.cache.get("b", 1) is None
        assert self.cache.invalidate("b", 1) is False

    def test_stale_put_discarded(self):
        """A render started before an invalidation is not stored."""
        epoch = self.cache.epoch
        self.cache.invalidate("b", 1)

        assert self.cache.put("b", 1, "stale", epoch=epoch) is False
        assert self.cache.get("b", 1) is None

    def test_current_epoch_put_stored(self):
        """A render with an unchanged epoch is stored."""
        epoch = self.cache.epoch

        assert self.cache.put("b", 1, "fresh", epoch=epoch) is True

    def test_prune(self):
        """prune() drops a board's entries for threads that no longer exist."""
        cache = RenderCache(max_entries=10)
        cache.put("b", 1, "one")
        cache.put("b", 2, "two")
        cache.put("other", 1, "kept")

        assert cache.prune("b", {2}) == 1
        assert ("b", 1) not in cache
        assert ("b", 2) in cache
        assert ("other", 1) in cache

    def test_clear(self):
        self.cache.put("b", 1, "one")
        self.cache.clear()

        assert len(self.cache) == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            RenderCache(max_entries=0)
