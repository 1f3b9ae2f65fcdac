"""Reusable FastAPI dependencies."""

from .services import (
    get_asset_registry,
    get_container,
    get_decision_engine,
    get_object_store,
    get_token_issuer,
    get_version_store,
)

__all__ = [
    "get_asset_registry",
    "get_container",
    "get_decision_engine",
    "get_object_store",
    "get_token_issuer",
    "get_version_store",
]
