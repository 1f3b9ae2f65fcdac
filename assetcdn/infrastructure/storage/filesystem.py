"""
Filesystem object store, keeps objects on local disk.

Disk calls run in the threadpool so a large upload or copy does not stall
other requests on the event loop.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import AsyncIterator
from pathlib import Path
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from .base import ObjectStore
from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class FilesystemObjectStore(ObjectStore):
    """Store objects under ``root`` in a two-level fan-out layout."""

    def __init__(self, root: Path | str, chunk_size: int = 1024 * 1024) -> None:
        self.root = Path(root).resolve()
        self.chunk_size = chunk_size

    def ensure_storage(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StoreUnavailableError("resolve", key, "invalid object key")
        return self.root / key[:2] / key

    @staticmethod
    def _write_file(target_path: Path, data: bytes | bytearray) -> None:
        temp_path = target_path.with_suffix(".upload")
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(data)
            temp_path.replace(target_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    @staticmethod
    def _copy_file(source: Path, target_path: Path) -> None:
        temp_path = target_path.with_suffix(".copy")
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, temp_path)
            os.replace(temp_path, target_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    async def put(self, key: str, data: bytes | bytearray, content_type: str) -> None:
        target_path = self._path(key)
        try:
            await run_in_threadpool(self._write_file, target_path, data)
        except OSError as exc:
            raise StoreUnavailableError("put", key, exc) from exc
        logger.debug("Stored object %s (%s, %d bytes)", key, content_type, len(data))

    async def get(self, key: str) -> AsyncIterator[bytes]:
        path = self._path(key)
        try:
            handle = await run_in_threadpool(path.open, "rb")
        except OSError as exc:
            raise StoreUnavailableError("get", key, exc) from exc
        return self._iter_file(handle)

    async def _iter_file(self, handle: BinaryIO) -> AsyncIterator[bytes]:
        try:
            while True:
                chunk = await run_in_threadpool(handle.read, self.chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            handle.close()

    async def copy(self, src_key: str, dest_key: str) -> None:
        source = self._path(src_key)
        target_path = self._path(dest_key)
        try:
            await run_in_threadpool(self._copy_file, source, target_path)
        except OSError as exc:
            raise StoreUnavailableError("copy", src_key, exc) from exc
        logger.debug("Copied object %s -> %s", src_key, dest_key)
