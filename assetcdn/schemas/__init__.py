"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetResponse(BaseModel):
    id: str
    storage_key: str
    filename: str
    mime_type: str
    size_bytes: int
    etag: str
    is_private: bool
    current_version_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublishResponse(BaseModel):
    success: bool = True
    new_version_id: str
    asset: AssetResponse


class TokenRequest(BaseModel):
    ttl_seconds: Optional[int] = Field(default=None, gt=0)


class TokenResponse(BaseModel):
    token: str
    asset_id: str
    expires_at: datetime


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    detail: str
