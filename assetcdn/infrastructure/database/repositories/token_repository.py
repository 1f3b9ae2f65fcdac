"""SQLAlchemy implementation for the access token repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetcdn.core.clock import ensure_utc
from assetcdn.db.models import AccessToken as AccessTokenModel
from assetcdn.domain.tokens.models import TokenRecord


class SqlAccessTokenRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, *, token_digest: str, asset_id: str, expires_at: datetime) -> TokenRecord:
        model = AccessTokenModel(
            token_digest=token_digest,
            asset_id=asset_id,
            expires_at=expires_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_domain(model)

    async def get_by_digest(self, token_digest: str) -> TokenRecord | None:
        stmt = select(AccessTokenModel).where(AccessTokenModel.token_digest == token_digest)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(AccessTokenModel).where(AccessTokenModel.expires_at <= now)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    @staticmethod
    def _to_domain(model: AccessTokenModel) -> TokenRecord:
        return TokenRecord(
            token_digest=model.token_digest,
            asset_id=model.asset_id,
            expires_at=ensure_utc(model.expires_at),
        )
