"""Domain models for frozen asset versions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Version:
    id: str
    asset_id: str
    storage_key: str
    etag: str
    created_at: datetime
