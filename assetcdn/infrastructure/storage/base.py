"""
Base object store, the narrow interface the delivery core consumes.
"""

from __future__ import annotations

import abc
import uuid
from collections.abc import AsyncIterator


def new_object_key() -> str:
    return str(uuid.uuid4())


class ObjectStore(abc.ABC):
    """Abstract base for object storage backends.

    Every failure surfaces as :class:`StoreUnavailableError`; backends never
    retry on their own.
    """

    @abc.abstractmethod
    async def put(self, key: str, data: bytes | bytearray, content_type: str) -> None:
        """Store ``data`` under ``key``."""

    @abc.abstractmethod
    async def get(self, key: str) -> AsyncIterator[bytes]:
        """Open ``key`` and return an async iterator over its bytes.

        The object is opened before returning, so a missing or unreachable
        object fails here rather than half way through a response.
        """

    @abc.abstractmethod
    async def copy(self, src_key: str, dest_key: str) -> None:
        """Duplicate the object at ``src_key`` to ``dest_key``."""

    async def read(self, key: str) -> bytes:
        stream = await self.get(key)
        return b"".join([chunk async for chunk in stream])
