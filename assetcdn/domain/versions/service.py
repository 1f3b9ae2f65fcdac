"""Version store: freezes assets into immutable, content-addressed versions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from assetcdn.core.clock import utcnow
from assetcdn.domain.assets.exceptions import AssetError, AssetNotFoundError
from assetcdn.domain.assets.models import Asset
from assetcdn.domain.assets.service import AssetRegistry
from assetcdn.infrastructure.database.repositories.version_repository import SqlVersionRepository
from assetcdn.infrastructure.database.session import session_scope
from assetcdn.infrastructure.storage import ObjectStore, new_object_key

from .exceptions import FreezeTransactionError
from .models import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PublishResult:
    version: Version
    asset: Asset


@dataclass(slots=True)
class VersionStore:
    sessions: async_sessionmaker[AsyncSession]
    object_store: ObjectStore
    registry: AssetRegistry

    async def freeze_version(self, asset: Asset) -> Version:
        result = await self._freeze(asset)
        return result.version

    async def publish(self, asset_id: str) -> PublishResult:
        asset = await self.registry.lookup_asset(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return await self._freeze(asset)

    async def lookup_version(self, version_id: str) -> tuple[Version, str] | None:
        """Return the version and its parent's mime type, or None."""
        async with session_scope(self.sessions) as session:
            return await SqlVersionRepository(session).get_with_mime_type(version_id)

    async def _freeze(self, asset: Asset) -> PublishResult:
        # Phase one: duplicate the bytes, outside any record store transaction.
        # A StoreUnavailableError here propagates before any metadata changes.
        version_key = new_object_key()
        await self.object_store.copy(asset.storage_key, version_key)

        # Phase two: version row and pointer move commit together or not at all.
        try:
            async with session_scope(self.sessions) as session:
                version = await SqlVersionRepository(session).create(
                    asset_id=asset.id,
                    storage_key=version_key,
                    etag=asset.etag,
                    created_at=utcnow(),
                )
                updated = await self.registry.repoint_current_version(
                    session,
                    asset.id,
                    version.id,
                    expected_version_id=asset.current_version_id,
                )
        except AssetError:
            logger.warning("Publish of asset %s rolled back; object %s is unreferenced", asset.id, version_key)
            raise
        except SQLAlchemyError as exc:
            logger.warning("Publish of asset %s failed in the record store; object %s is unreferenced", asset.id, version_key)
            raise FreezeTransactionError(f"failed to record version for asset {asset.id}") from exc

        logger.info("Published asset %s as version %s", asset.id, version.id)
        return PublishResult(version=version, asset=updated)
