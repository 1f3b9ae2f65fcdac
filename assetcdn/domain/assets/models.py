"""Domain models for delivered assets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Asset:
    id: str
    storage_key: str
    filename: str
    mime_type: str
    size_bytes: int
    etag: str
    is_private: bool
    current_version_id: Optional[str]
    created_at: Optional[datetime]
    updated_at: datetime

    @property
    def is_published(self) -> bool:
        return self.current_version_id is not None
