"""Tests for capability token issue and validation."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from assetcdn.core.clock import utcnow
from assetcdn.db.models import AccessToken as AccessTokenModel


async def test_issue_then_validate(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"secret"), is_private=True)

    issued = await container.tokens.issue_token(asset.id, timedelta(minutes=5))
    grant = await container.tokens.validate_token(issued.token)

    assert grant is not None
    assert grant.asset_id == asset.id
    assert grant.storage_key == asset.storage_key
    assert grant.etag == asset.etag
    assert grant.mime_type == "text/plain"


async def test_token_is_reusable_until_expiry(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"secret"), is_private=True)
    issued = await container.tokens.issue_token(asset.id, timedelta(minutes=5))

    assert await container.tokens.validate_token(issued.token) is not None
    assert await container.tokens.validate_token(issued.token) is not None


async def test_expired_token_is_rejected(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"secret"), is_private=True)
    issued = await container.tokens.issue_token(asset.id, timedelta(seconds=30))

    assert await container.tokens.validate_token(issued.token, now=issued.expires_at) is None
    later = issued.expires_at + timedelta(seconds=1)
    assert await container.tokens.validate_token(issued.token, now=later) is None


async def test_unknown_and_empty_tokens_are_rejected(container):
    assert await container.tokens.validate_token("not-a-token") is None
    assert await container.tokens.validate_token("") is None


async def test_token_for_missing_asset_is_rejected(container):
    issued = await container.tokens.issue_token("no-such-asset", timedelta(minutes=5))
    assert await container.tokens.validate_token(issued.token) is None


async def test_tokens_are_unpredictable_and_not_stored_in_clear(container):
    first = await container.tokens.issue_token("a", timedelta(minutes=5))
    second = await container.tokens.issue_token("a", timedelta(minutes=5))

    assert first.token != second.token
    assert len(first.token) >= 43

    async with container.sessions() as session:
        digests = (await session.execute(select(AccessTokenModel.token_digest))).scalars().all()
    assert first.token not in digests
    assert second.token not in digests


async def test_non_positive_ttl_is_rejected(container):
    with pytest.raises(ValueError):
        await container.tokens.issue_token("a", timedelta(0))


async def test_purge_expired_only_removes_dead_tokens(container, upload_factory):
    asset = await container.registry.store_upload(upload_factory(b"secret"), is_private=True)
    short = await container.tokens.issue_token(asset.id, timedelta(seconds=1))
    long = await container.tokens.issue_token(asset.id, timedelta(hours=1))

    removed = await container.tokens.purge_expired(now=utcnow() + timedelta(minutes=1))

    assert removed == 1
    assert await container.tokens.validate_token(short.token) is None
    assert await container.tokens.validate_token(long.token) is not None
