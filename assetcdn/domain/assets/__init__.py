"""Asset domain models and errors."""

from .models import Asset
from .exceptions import (
    AssetError,
    AssetNotFoundError,
    ForeignVersionError,
    MissingUploadError,
    PublishConflictError,
    UploadTooLargeError,
)

__all__ = [
    "Asset",
    "AssetError",
    "AssetNotFoundError",
    "ForeignVersionError",
    "MissingUploadError",
    "PublishConflictError",
    "UploadTooLargeError",
]
