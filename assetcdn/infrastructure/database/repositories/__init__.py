"""SQLAlchemy-backed repository implementations."""

from .asset_repository import SqlAssetRepository
from .version_repository import SqlVersionRepository
from .token_repository import SqlAccessTokenRepository

__all__ = [
    "SqlAssetRepository",
    "SqlVersionRepository",
    "SqlAccessTokenRepository",
]
