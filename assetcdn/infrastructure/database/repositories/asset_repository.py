"""SQLAlchemy implementation for the asset repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from assetcdn.core.clock import ensure_utc
from assetcdn.db.models import Asset as AssetModel, AssetVersion as AssetVersionModel
from assetcdn.domain.assets.models import Asset


class SqlAssetRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        storage_key: str,
        filename: str,
        mime_type: str,
        size_bytes: int,
        etag: str,
        is_private: bool,
        updated_at: datetime,
    ) -> Asset:
        model = AssetModel(
            storage_key=storage_key,
            filename=filename,
            mime_type=mime_type,
            size_bytes=size_bytes,
            etag=etag,
            is_private=is_private,
            created_at=updated_at,
            updated_at=updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def get_by_id(self, asset_id: str) -> Asset | None:
        stmt = select(AssetModel).where(AssetModel.id == asset_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def owns_version(self, asset_id: str, version_id: str) -> bool:
        stmt = select(AssetVersionModel.id).where(
            AssetVersionModel.id == version_id,
            AssetVersionModel.asset_id == asset_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def compare_and_set_current_version(
        self,
        asset_id: str,
        *,
        expected_version_id: str | None,
        version_id: str,
        updated_at: datetime,
    ) -> Asset | None:
        """Move the pointer only if it still holds ``expected_version_id``."""
        if expected_version_id is None:
            guard = AssetModel.current_version_id.is_(None)
        else:
            guard = AssetModel.current_version_id == expected_version_id
        stmt = (
            update(AssetModel)
            .where(AssetModel.id == asset_id)
            .where(guard)
            .values(current_version_id=version_id, updated_at=updated_at)
            .execution_options(synchronize_session="fetch")
            .returning(AssetModel)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        if model is None:
            return None
        await self.session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: AssetModel) -> Asset:
        return Asset(
            id=str(model.id),
            storage_key=model.storage_key,
            filename=model.filename,
            mime_type=model.mime_type,
            size_bytes=model.size_bytes,
            etag=model.etag,
            is_private=bool(model.is_private),
            current_version_id=model.current_version_id,
            created_at=ensure_utc(model.created_at) if model.created_at else None,
            updated_at=ensure_utc(model.updated_at),
        )
