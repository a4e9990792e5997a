"""
Tests for BumpBoard Poster Identity
"""

import pytest

from bumpboard.core.identity import IdentityHasher, normalize_origin


class TestIdentityHasher:
    """Tests for IdentityHasher class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.hasher = IdentityHasher(bucket_seconds=86400, tag_length=10, salt=b"s" * 32)

    def test_deterministic(self):
        """Same origin and bucket give the same tag."""
        assert self.hasher.hash("203.0.113.7", 19000) == self.hasher.hash("203.0.113.7", 19000)

    def test_tag_format(self):
        """Tags are lowercase hex of the configured length."""
        tag = self.hasher.hash("203.0.113.7", 1)

        assert len(tag) == 10
        assert all(c in "0123456789abcdef" for c in tag)

    def test_different_origins_differ(self):
        """Distinct origins give distinct tags."""
        tags = {self.hasher.hash(f"10.0.0.{i}", 1) for i in range(50)}

        assert len(tags) == 50

    def test_different_buckets_differ(self):
        """The same origin gets a new tag in a new bucket."""
        assert self.hasher.hash("203.0.113.7", 1) != self.hasher.hash("203.0.113.7", 2)

    def test_different_salt_differs(self):
        """A new process salt changes every tag."""
        other = IdentityHasher(salt=b"t" * 32)

        assert self.hasher.hash("203.0.113.7", 1) != other.hash("203.0.113.7", 1)

    def test_random_salt_per_instance(self):
        """Hashers without an explicit salt do not agree."""
        a = IdentityHasher()
        b = IdentityHasher()

        assert a.hash("203.0.113.7", 1) != b.hash("203.0.113.7", 1)

    def test_bucket(self):
        """Timestamps map to day buckets."""
        assert self.hasher.bucket(0) == 0
        assert self.hasher.bucket(86399.9) == 0
        assert self.hasher.bucket(86400) == 1

    def test_bucketing_disabled(self):
        """bucket_seconds=0 puts everything in one bucket."""
        hasher = IdentityHasher(bucket_seconds=0, salt=b"s" * 32)

        assert hasher.tag("o", 0) == hasher.tag("o", 10 ** 9)

    def test_tag_uses_bucket(self):
        """tag() is hash() of the timestamp's bucket."""
        assert self.hasher.tag("o", 86400 * 5 + 10) == self.hasher.hash("o", 5)

    def test_forwarded_chain_uses_client(self):
        """Only the first address of a forwarded chain counts."""
        assert self.hasher.hash("203.0.113.7, 10.0.0.1", 1) == self.hasher.hash("203.0.113.7", 1)

    @pytest.mark.parametrize("length", [3, 65])
    def test_invalid_tag_length(self, length):
        """Tag lengths outside 4..64 are rejected."""
        with pytest.raises(ValueError):
            IdentityHasher(tag_length=length)


class TestNormalizeOrigin:
    """Tests for origin normalisation."""

    def test_strips_whitespace(self):
        assert normalize_origin("  203.0.113.7 ") == "203.0.113.7"

    def test_first_of_chain(self):
        assert normalize_origin("a, b, c") == "a"

    def test_missing(self):
        assert normalize_origin(None) == ""
        assert normalize_origin("") == ""
