"""Domain models for capability tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str = field(repr=False)
    asset_id: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class TokenRecord:
    token_digest: str = field(repr=False)
    asset_id: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AccessGrant:
    """What a valid token unlocks: enough to serve the private content."""

    asset_id: str
    storage_key: str
    mime_type: str
    etag: str
