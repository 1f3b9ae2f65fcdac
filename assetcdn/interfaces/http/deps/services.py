"""Service dependency providers backed by the application container."""

from fastapi import Depends, Request

from assetcdn.core.container import ApplicationContainer
from assetcdn.domain.assets.service import AssetRegistry
from assetcdn.domain.delivery.engine import CacheDecisionEngine
from assetcdn.domain.tokens.service import AccessTokenIssuer
from assetcdn.domain.versions.service import VersionStore
from assetcdn.infrastructure.storage import ObjectStore


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_asset_registry(container: ApplicationContainer = Depends(get_container)) -> AssetRegistry:
    return container.registry


def get_version_store(container: ApplicationContainer = Depends(get_container)) -> VersionStore:
    return container.versions


def get_token_issuer(container: ApplicationContainer = Depends(get_container)) -> AccessTokenIssuer:
    return container.tokens


def get_decision_engine(container: ApplicationContainer = Depends(get_container)) -> CacheDecisionEngine:
    return container.decisions


def get_object_store(container: ApplicationContainer = Depends(get_container)) -> ObjectStore:
    return container.object_store


__all__ = [
    "get_asset_registry",
    "get_container",
    "get_decision_engine",
    "get_object_store",
    "get_token_issuer",
    "get_version_store",
]
