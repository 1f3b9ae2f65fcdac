"""SQLAlchemy implementation for the version repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetcdn.core.clock import ensure_utc
from assetcdn.db.models import Asset as AssetModel, AssetVersion as AssetVersionModel
from assetcdn.domain.versions.models import Version


class SqlVersionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        asset_id: str,
        storage_key: str,
        etag: str,
        created_at: datetime,
    ) -> Version:
        model = AssetVersionModel(
            asset_id=asset_id,
            storage_key=storage_key,
            etag=etag,
            created_at=created_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_domain(model)

    async def get_with_mime_type(self, version_id: str) -> tuple[Version, str] | None:
        stmt = (
            select(AssetVersionModel, AssetModel.mime_type)
            .join(AssetModel, AssetVersionModel.asset_id == AssetModel.id)
            .where(AssetVersionModel.id == version_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        model, mime_type = row
        return self._to_domain(model), mime_type

    @staticmethod
    def _to_domain(model: AssetVersionModel) -> Version:
        return Version(
            id=str(model.id),
            asset_id=model.asset_id,
            storage_key=model.storage_key,
            etag=model.etag,
            created_at=ensure_utc(model.created_at),
        )
