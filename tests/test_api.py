"""End-to-end tests of the HTTP surface."""

import warnings
from datetime import timedelta

from httpx import ASGITransport, AsyncClient

from assetcdn.core.clock import utcnow
from assetcdn.infrastructure.database import init_db
from assetcdn.infrastructure.storage import FilesystemObjectStore, StoreUnavailableError
from assetcdn.main import create_app


async def _upload(client, content: bytes, is_private: bool = False, filename: str = "hello.txt"):
    data = {"is_private": "true"} if is_private else {}
    return await client.post(
        "/assets/upload",
        files={"file": (filename, content, "text/plain")},
        data=data,
    )


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_core_delivery_flow(client):
    upload = await _upload(client, b"hello")
    assert upload.status_code == 201
    asset = upload.json()
    assert asset["id"]
    etag = asset["etag"]
    assert asset["is_private"] is False
    assert asset["size_bytes"] == 5

    download = await client.get(f"/assets/{asset['id']}/download")
    assert download.status_code == 200
    assert download.content == b"hello"
    assert download.headers["etag"] == etag
    assert "public" in download.headers["cache-control"]
    assert download.headers["last-modified"].endswith("GMT")

    revalidate = await client.get(f"/assets/{asset['id']}/download", headers={"If-None-Match": etag})
    assert revalidate.status_code == 304
    assert revalidate.content == b""
    assert revalidate.headers["etag"] == etag

    publish = await client.post(f"/assets/{asset['id']}/publish")
    assert publish.status_code == 200
    body = publish.json()
    assert body["success"] is True
    version_id = body["new_version_id"]
    assert body["asset"]["current_version_id"] == version_id

    frozen = await client.get(f"/assets/public/{version_id}")
    assert frozen.status_code == 200
    assert frozen.content == b"hello"
    assert frozen.headers["etag"] == etag
    assert "immutable" in frozen.headers["cache-control"]


async def test_conditional_with_other_validator_returns_full_body(client):
    asset = (await _upload(client, b"hello")).json()

    response = await client.get(f"/assets/{asset['id']}/download", headers={"If-None-Match": '"stale"'})

    assert response.status_code == 200
    assert response.content == b"hello"


async def test_versions_survive_later_publishes(client):
    asset = (await _upload(client, b"hello")).json()
    first = (await client.post(f"/assets/{asset['id']}/publish")).json()["new_version_id"]
    second = (await client.post(f"/assets/{asset['id']}/publish")).json()["new_version_id"]
    assert first != second

    for version_id in (first, second):
        response = await client.get(f"/assets/public/{version_id}")
        assert response.status_code == 200
        assert response.content == b"hello"
        assert response.headers["etag"] == asset["etag"]


async def test_upload_without_file_is_rejected(client):
    response = await client.post("/assets/upload", data={"is_private": "true"})
    assert response.status_code == 400


async def test_unknown_ids(client):
    assert (await client.get("/assets/missing/download")).status_code == 404
    assert (await client.post("/assets/missing/publish")).status_code == 404
    assert (await client.get("/assets/public/missing")).status_code == 404
    assert (await client.get("/assets/private/missing")).status_code == 403


async def test_private_asset_is_forbidden_by_id(client):
    asset = (await _upload(client, b"secret", is_private=True)).json()
    assert asset["is_private"] is True

    plain = await client.get(f"/assets/{asset['id']}/download")
    conditional = await client.get(
        f"/assets/{asset['id']}/download", headers={"If-None-Match": asset["etag"]}
    )

    assert plain.status_code == 403
    assert conditional.status_code == 403


async def test_private_download_with_token(client, monkeypatch):
    asset = (await _upload(client, b"secret", is_private=True)).json()

    issued = await client.post(f"/assets/{asset['id']}/token", json={"ttl_seconds": 60})
    assert issued.status_code == 201
    token = issued.json()["token"]
    assert issued.json()["asset_id"] == asset["id"]

    response = await client.get(f"/assets/private/{token}")
    assert response.status_code == 200
    assert response.content == b"secret"
    assert response.headers["etag"] == asset["etag"]
    assert "no-store" in response.headers["cache-control"]
    assert response.headers["cache-control"].startswith("private")

    after_expiry = utcnow() + timedelta(seconds=61)
    monkeypatch.setattr("assetcdn.domain.tokens.service.utcnow", lambda: after_expiry)
    expired = await client.get(f"/assets/private/{token}")
    assert expired.status_code == 403


async def test_token_uses_default_ttl_without_body(client):
    asset = (await _upload(client, b"secret", is_private=True)).json()

    response = await client.post(f"/assets/{asset['id']}/token")

    assert response.status_code == 201
    assert response.json()["token"]


async def test_token_ttl_is_bounded(client):
    too_long = await client.post("/assets/any/token", json={"ttl_seconds": 10 * 24 * 3600})
    not_positive = await client.post("/assets/any/token", json={"ttl_seconds": 0})

    assert too_long.status_code == 422
    assert not_positive.status_code == 422


async def test_ttl_rejection_uses_no_deprecated_status_names(client):
    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*UNPROCESSABLE_ENTITY.*")
        response = await client.post("/assets/any/token", json={"ttl_seconds": 10 * 24 * 3600})
    assert response.status_code == 422


class _UnavailableStore(FilesystemObjectStore):
    async def get(self, key: str):
        raise StoreUnavailableError("get", key, "simulated outage")


async def test_object_store_outage_is_service_unavailable(settings):
    store = _UnavailableStore(settings.storage.root)
    store.ensure_storage()
    app = create_app(settings, object_store=store)
    await init_db(app.state.container.engine)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            asset = (await _upload(client, b"hello")).json()
            response = await client.get(f"/assets/{asset['id']}/download")
    finally:
        await app.state.container.dispose()

    assert response.status_code == 503
