"""Pytest configuration and fixtures."""

from __future__ import annotations

import io

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import Headers, UploadFile

from assetcdn.core.config import DatabaseSettings, Settings, StorageSettings
from assetcdn.core.container import ApplicationContainer
from assetcdn.infrastructure.database import init_db
from assetcdn.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Isolated settings: a SQLite file and an object directory per test."""
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'assetcdn.db'}"),
        storage=StorageSettings(root=tmp_path / "objects"),
    )


@pytest.fixture
async def container(settings):
    container = ApplicationContainer.build(settings)
    await init_db(container.engine)
    yield container
    await container.dispose()


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    await init_db(app.state.container.engine)
    yield app
    await app.state.container.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


def make_upload(data: bytes, filename: str = "hello.txt", content_type: str = "text/plain") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def upload_factory():
    return make_upload
