"""Asset registry: owns the logical asset records."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from assetcdn.core.clock import next_timestamp, utcnow
from assetcdn.core.identity import IdentityHasher
from assetcdn.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from assetcdn.infrastructure.database.session import session_scope
from assetcdn.infrastructure.storage import ObjectStore, new_object_key

from .exceptions import (
    AssetNotFoundError,
    ForeignVersionError,
    MissingUploadError,
    PublishConflictError,
    UploadTooLargeError,
)
from .models import Asset

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(slots=True)
class AssetRegistry:
    sessions: async_sessionmaker[AsyncSession]
    object_store: ObjectStore
    max_upload_bytes: int = 50 * 1024 * 1024
    chunk_size: int = 1024 * 1024

    async def register_asset(
        self,
        storage_key: str,
        filename: str,
        mime_type: Optional[str],
        size_bytes: int,
        identity_tag: str,
        is_private: bool,
    ) -> Asset:
        if not storage_key:
            raise ValueError("storage_key must not be empty")
        async with session_scope(self.sessions) as session:
            asset = await SqlAssetRepository(session).create(
                storage_key=storage_key,
                filename=filename,
                mime_type=mime_type or DEFAULT_MIME_TYPE,
                size_bytes=size_bytes,
                etag=identity_tag,
                is_private=is_private,
                updated_at=utcnow(),
            )
        logger.info("Registered asset %s (%s, %d bytes, private=%s)", asset.id, filename, size_bytes, is_private)
        return asset

    async def lookup_asset(self, asset_id: str) -> Asset | None:
        async with session_scope(self.sessions) as session:
            return await SqlAssetRepository(session).get_by_id(asset_id)

    async def repoint_current_version(
        self,
        session: AsyncSession,
        asset_id: str,
        version_id: str,
        *,
        expected_version_id: Optional[str],
    ) -> Asset:
        """Move ``asset_id``'s current version pointer inside an open freeze transaction.

        The caller owns ``session`` and its transaction. The pointer only moves
        if it still holds ``expected_version_id``; otherwise another publish
        committed first and :class:`PublishConflictError` is raised so the
        caller rolls back instead of overwriting it.
        """
        repository = SqlAssetRepository(session)
        current = await repository.get_by_id(asset_id)
        if current is None:
            raise AssetNotFoundError(asset_id)
        if not await repository.owns_version(asset_id, version_id):
            raise ForeignVersionError(f"version {version_id} does not belong to asset {asset_id}")
        if current.current_version_id != expected_version_id:
            raise PublishConflictError(asset_id)

        updated = await repository.compare_and_set_current_version(
            asset_id,
            expected_version_id=expected_version_id,
            version_id=version_id,
            updated_at=next_timestamp(current.updated_at),
        )
        if updated is None:
            raise PublishConflictError(asset_id)
        return updated

    async def store_upload(self, upload: Optional[UploadFile], is_private: bool = False) -> Asset:
        """Stream ``upload`` into the object store and register it."""
        if upload is None:
            raise MissingUploadError("No file uploaded")

        hasher = IdentityHasher()
        buffer = bytearray()
        try:
            while True:
                chunk = await upload.read(self.chunk_size)
                if not chunk:
                    break
                if hasher.size + len(chunk) > self.max_upload_bytes:
                    raise UploadTooLargeError(f"Upload exceeds {self.max_upload_bytes} bytes")
                hasher.update(chunk)
                buffer.extend(chunk)
        finally:
            await upload.close()

        filename = _sanitize_filename(upload.filename) or "asset"
        mime_type = upload.content_type or DEFAULT_MIME_TYPE
        storage_key = new_object_key()

        await self.object_store.put(storage_key, buffer, mime_type)
        try:
            return await self.register_asset(
                storage_key,
                filename,
                mime_type,
                hasher.size,
                hasher.identity,
                is_private,
            )
        except Exception:
            logger.warning("Object %s stored but asset registration failed; object is unreferenced", storage_key)
            raise


def _sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename)
    # strip dangerous characters
    return name.replace("\0", "").strip()
