"""Tests for the asset registry."""

import pytest

from assetcdn.core.identity import compute_identity
from assetcdn.domain.assets import MissingUploadError, UploadTooLargeError
from assetcdn.domain.assets.service import AssetRegistry


async def test_register_and_lookup(container):
    asset = await container.registry.register_asset(
        "key-1", "a.txt", "text/plain", 5, compute_identity(b"hello"), False
    )

    found = await container.registry.lookup_asset(asset.id)
    assert found is not None
    assert found.id == asset.id
    assert found.etag == compute_identity(b"hello")
    assert found.current_version_id is None
    assert not found.is_published
    assert found.updated_at.tzinfo is not None


async def test_register_rejects_empty_storage_key(container):
    with pytest.raises(ValueError):
        await container.registry.register_asset("", "a.txt", "text/plain", 0, compute_identity(b""), False)


async def test_register_defaults_mime_type(container):
    asset = await container.registry.register_asset("key-2", "blob", None, 0, compute_identity(b""), False)
    assert asset.mime_type == "application/octet-stream"


async def test_lookup_unknown_asset_returns_none(container):
    assert await container.registry.lookup_asset("missing") is None


async def test_store_upload_persists_bytes_and_identity(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"hello"), is_private=True)

    assert asset.etag == compute_identity(b"hello")
    assert asset.size_bytes == 5
    assert asset.filename == "hello.txt"
    assert asset.mime_type == "text/plain"
    assert asset.is_private is True
    assert await container.object_store.read(asset.storage_key) == b"hello"


async def test_store_upload_strips_directories_from_filename(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"x", filename="../../etc/passwd"))
    assert asset.filename == "passwd"


async def test_store_upload_accepts_empty_file(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b""))
    assert asset.size_bytes == 0
    assert asset.etag == compute_identity(b"")


async def test_store_upload_requires_a_file(container):
    with pytest.raises(MissingUploadError):
        await container.registry.store_upload(None)


async def test_store_upload_enforces_size_limit(container, upload_factory):
    registry = AssetRegistry(container.sessions, container.object_store, max_upload_bytes=4, chunk_size=2)
    with pytest.raises(UploadTooLargeError):
        await registry.store_upload(upload_factory(b"hello"))


async def test_store_upload_hands_its_buffer_to_the_store(container, upload_factory, monkeypatch):
    received = []
    original_put = type(container.object_store).put

    async def recording_put(self, key, data, content_type):
        received.append(data)
        await original_put(self, key, data, content_type)

    monkeypatch.setattr(type(container.object_store), "put", recording_put)

    asset = await container.registry.store_upload(upload_factory(b"hello"))

    assert len(received) == 1
    assert isinstance(received[0], bytearray)
    assert await container.object_store.read(asset.storage_key) == b"hello"
