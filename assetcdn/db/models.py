"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from assetcdn.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    storage_key = Column(String(255), nullable=False)
    filename = Column(String(255), nullable=False)
    mime_type = Column(String(255), nullable=False, default="application/octet-stream")
    size_bytes = Column(Integer, nullable=False)
    etag = Column(String(80), nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    # use_alter breaks the assets <-> asset_versions FK cycle for create_all
    current_version_id = Column(
        String(36),
        ForeignKey("asset_versions.id", use_alter=True, name="fk_assets_current_version_id"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False)


class AssetVersion(Base):
    __tablename__ = "asset_versions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    asset_id = Column(String(36), ForeignKey("assets.id"), nullable=False, index=True)
    storage_key = Column(String(255), nullable=False, unique=True)
    etag = Column(String(80), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class AccessToken(Base):
    __tablename__ = "access_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_digest = Column(String(64), nullable=False, unique=True, index=True)
    asset_id = Column(String(36), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
