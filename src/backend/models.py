# src/backend/models.py — v1
"""Index record stored beside each archive."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class CacheEntryRecord(BaseModel):
    """One cache entry; 'reserved' until its archive is committed."""

    key: str
    archive: str
    created_at: datetime
    status: Literal["reserved", "committed"] = "reserved"
    size_bytes: int = 0
