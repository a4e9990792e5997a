"""
BumpBoard Poster Identity

Derives pseudonymous poster tags from request origins with HMAC-SHA256.
The raw origin is never stored; only the truncated tag is kept.
"""

import secrets
import logging

from cryptography.hazmat.primitives import hashes, hmac

logger = logging.getLogger(__name__)


def normalize_origin(origin: str | None) -> str:
    """
    Reduce a forwarded-origin header to the client address.

    "203.0.113.7, 10.0.0.1" -> "203.0.113.7". Missing origins become "".
    """
    if not origin:
        return ""
    return origin.split(",")[0].strip()


class IdentityHasher:
    """
    Maps (origin, time bucket) to an opaque poster tag.

    Keyed by a random process-wide salt: tags are stable within a bucket
    for the life of the process and change on restart.
    """

    SALT_LENGTH = 32

    def __init__(
        self,
        bucket_seconds: int = 86400,
        tag_length: int = 10,
        salt: bytes | None = None
    ):
        """
        Initialize the hasher.

        Args:
            bucket_seconds: Width of a time bucket (0 disables bucketing)
            tag_length: Number of hex characters in a tag
            salt: Secret key, generated when not given
        """
        if not 4 <= tag_length <= 64:
            raise ValueError("tag_length must be between 4 and 64")

        self.bucket_seconds = bucket_seconds
        self.tag_length = tag_length
        self._salt = salt if salt is not None else secrets.token_bytes(self.SALT_LENGTH)

        logger.debug(
            f"IdentityHasher initialized: bucket={bucket_seconds}s, "
            f"tag_length={tag_length}"
        )

    def bucket(self, timestamp: float) -> int:
        """Return the time bucket a timestamp falls in."""
        if self.bucket_seconds <= 0:
            return 0
        return int(timestamp // self.bucket_seconds)

    def hash(self, origin: str, time_bucket: int) -> str:
        """Derive the tag for an origin within a time bucket."""
        mac = hmac.HMAC(self._salt, hashes.SHA256())
        mac.update(normalize_origin(origin).encode("utf-8"))
        mac.update(b"\x00")
        mac.update(str(time_bucket).encode("ascii"))
        return mac.finalize().hex()[:self.tag_length]

    def tag(self, origin: str, timestamp: float) -> str:
        """Convenience method: hash an origin for the bucket of a timestamp."""
        return self.hash(origin, self.bucket(timestamp))
