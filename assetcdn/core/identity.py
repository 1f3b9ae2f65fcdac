"""Content identity tags used as strong HTTP entity tags."""

from __future__ import annotations

import hashlib


def format_identity(hexdigest: str) -> str:
    """Render a hex digest as a quoted entity-tag value."""
    return f'"{hexdigest}"'


def compute_identity(data: bytes) -> str:
    """Return the SHA-256 identity tag of ``data``, quoted per RFC 7232."""
    return format_identity(hashlib.sha256(data).hexdigest())


class IdentityHasher:
    """Incremental identity computation for chunked uploads."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha256()
        self._size = 0

    def update(self, chunk: bytes) -> None:
        self._hasher.update(chunk)
        self._size += len(chunk)

    @property
    def size(self) -> int:
        return self._size

    @property
    def identity(self) -> str:
        return format_identity(self._hasher.hexdigest())


__all__ = ["IdentityHasher", "compute_identity", "format_identity"]
