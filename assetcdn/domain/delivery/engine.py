"""Cache decision engine.

Turns a download request plus stored state into a :class:`Disposition`: the
status code, the caching headers downstream caches rely on, and whether the
body has to be fetched from the object store at all.

Three request classes exist:

* mutable download: the current bytes of a public asset, revalidated per
  request through ``If-None-Match``;
* immutable version download: a frozen version, cacheable forever;
* private download: a private asset reached through a capability token,
  never stored by shared caches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from starlette import status

from assetcdn.core.clock import http_date
from assetcdn.core.config import CacheSettings
from assetcdn.domain.assets.service import AssetRegistry
from assetcdn.domain.tokens.service import AccessTokenIssuer
from assetcdn.domain.versions.service import VersionStore


@dataclass(frozen=True, slots=True)
class Disposition:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    fetch_body: bool = False
    storage_key: Optional[str] = None
    detail: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status >= 400


def _not_found(detail: str) -> Disposition:
    return Disposition(status=status.HTTP_404_NOT_FOUND, detail=detail)


def _forbidden(detail: str) -> Disposition:
    return Disposition(status=status.HTTP_403_FORBIDDEN, detail=detail)


@dataclass(slots=True)
class CacheDecisionEngine:
    registry: AssetRegistry
    versions: VersionStore
    tokens: AccessTokenIssuer
    cache: CacheSettings = field(default_factory=CacheSettings)

    async def decide_mutable(self, asset_id: str, if_none_match: Optional[str] = None) -> Disposition:
        asset = await self.registry.lookup_asset(asset_id)
        if asset is None:
            return _not_found("Not found")
        # A conditional header never unlocks a private asset on this path.
        if asset.is_private:
            return _forbidden("Asset is private")

        headers = {
            "ETag": asset.etag,
            "Last-Modified": http_date(asset.updated_at),
            "Cache-Control": self.cache.mutable_cache_control,
            "Content-Type": asset.mime_type,
        }
        if if_none_match is not None and if_none_match == asset.etag:
            return Disposition(status=status.HTTP_304_NOT_MODIFIED, headers=headers)
        return Disposition(
            status=status.HTTP_200_OK,
            headers=headers,
            fetch_body=True,
            storage_key=asset.storage_key,
        )

    async def decide_version(self, version_id: str) -> Disposition:
        found = await self.versions.lookup_version(version_id)
        if found is None:
            return _not_found("Version not found")
        version, mime_type = found
        return Disposition(
            status=status.HTTP_200_OK,
            headers={
                "ETag": version.etag,
                "Cache-Control": self.cache.immutable_cache_control,
                "Content-Type": mime_type,
            },
            fetch_body=True,
            storage_key=version.storage_key,
        )

    async def decide_private(self, token: str) -> Disposition:
        grant = await self.tokens.validate_token(token)
        if grant is None:
            return _forbidden("Invalid or expired token")
        return Disposition(
            status=status.HTTP_200_OK,
            headers={
                "ETag": grant.etag,
                "Cache-Control": self.cache.private_cache_control,
                "Content-Type": grant.mime_type,
            },
            fetch_body=True,
            storage_key=grant.storage_key,
        )
