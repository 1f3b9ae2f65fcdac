"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from assetcdn.core.config import Settings
from assetcdn.domain.assets.service import AssetRegistry
from assetcdn.domain.delivery.engine import CacheDecisionEngine
from assetcdn.domain.tokens.service import AccessTokenIssuer
from assetcdn.domain.versions.service import VersionStore
from assetcdn.infrastructure.database.session import build_engine, build_session_factory
from assetcdn.infrastructure.storage import ObjectStore, build_object_store


@dataclass(slots=True)
class ApplicationContainer:
    """Resource handles and services, built once per application.

    Services receive the session factory and object store explicitly; each
    operation opens its own session and releases it on every exit path.
    """

    settings: Settings
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]
    object_store: ObjectStore
    registry: AssetRegistry
    versions: VersionStore
    tokens: AccessTokenIssuer
    decisions: CacheDecisionEngine

    @classmethod
    def build(cls, settings: Settings, object_store: ObjectStore | None = None) -> "ApplicationContainer":
        engine = build_engine(settings)
        sessions = build_session_factory(engine)
        store = object_store or build_object_store(settings)
        registry = AssetRegistry(
            sessions,
            store,
            max_upload_bytes=settings.storage.max_upload_bytes,
            chunk_size=settings.storage.chunk_size,
        )
        versions = VersionStore(sessions, store, registry)
        tokens = AccessTokenIssuer(sessions)
        return cls(
            settings=settings,
            engine=engine,
            sessions=sessions,
            object_store=store,
            registry=registry,
            versions=versions,
            tokens=tokens,
            decisions=CacheDecisionEngine(registry, versions, tokens, settings.cache),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = ["ApplicationContainer"]
