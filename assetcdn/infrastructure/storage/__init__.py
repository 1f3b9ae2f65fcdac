"""Object store backends."""

from assetcdn.core.config import Settings

from .base import ObjectStore, new_object_key
from .exceptions import StoreUnavailableError
from .filesystem import FilesystemObjectStore


def build_object_store(settings: Settings) -> ObjectStore:
    storage = settings.storage
    if storage.backend == "s3":
        from .s3 import S3ObjectStore

        return S3ObjectStore(
            bucket=storage.bucket,
            endpoint_url=storage.endpoint_url,
            access_key_id=storage.access_key_id,
            secret_access_key=storage.secret_access_key,
            region=storage.region,
            chunk_size=storage.chunk_size,
        )
    store = FilesystemObjectStore(storage.root, chunk_size=storage.chunk_size)
    store.ensure_storage()
    return store


__all__ = [
    "FilesystemObjectStore",
    "ObjectStore",
    "StoreUnavailableError",
    "build_object_store",
    "new_object_key",
]
