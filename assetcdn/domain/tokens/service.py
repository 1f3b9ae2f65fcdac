"""Access token issuer: short-lived capabilities for private assets."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from assetcdn.core.clock import utcnow
from assetcdn.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from assetcdn.infrastructure.database.repositories.token_repository import SqlAccessTokenRepository
from assetcdn.infrastructure.database.session import session_scope

from .models import AccessGrant, IssuedToken

logger = logging.getLogger(__name__)

# 32 random bytes, 256 bits of entropy
TOKEN_BYTES = 32


def _digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass(slots=True)
class AccessTokenIssuer:
    sessions: async_sessionmaker[AsyncSession]

    async def issue_token(self, asset_id: str, ttl: timedelta) -> IssuedToken:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        token = secrets.token_urlsafe(TOKEN_BYTES)
        expires_at = utcnow() + ttl
        async with session_scope(self.sessions) as session:
            await SqlAccessTokenRepository(session).create(
                token_digest=_digest(token),
                asset_id=asset_id,
                expires_at=expires_at,
            )
        logger.info("Issued access token for asset %s, expires %s", asset_id, expires_at.isoformat())
        return IssuedToken(token=token, asset_id=asset_id, expires_at=expires_at)

    async def validate_token(self, token: str, now: Optional[datetime] = None) -> AccessGrant | None:
        """Return the grant for ``token`` or None.

        Unknown, expired and orphaned tokens all come back as None so callers
        cannot tell them apart.
        """
        if not token:
            return None
        digest = _digest(token)
        async with session_scope(self.sessions) as session:
            record = await SqlAccessTokenRepository(session).get_by_digest(digest)
            if record is None or not hmac.compare_digest(record.token_digest, digest):
                return None
            if (now or utcnow()) >= record.expires_at:
                return None
            asset = await SqlAssetRepository(session).get_by_id(record.asset_id)
        if asset is None:
            return None
        return AccessGrant(
            asset_id=asset.id,
            storage_key=asset.storage_key,
            mime_type=asset.mime_type,
            etag=asset.etag,
        )

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        async with session_scope(self.sessions) as session:
            removed = await SqlAccessTokenRepository(session).delete_expired(now or utcnow())
        logger.info("Purged %d expired access tokens", removed)
        return removed
