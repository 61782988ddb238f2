# lan_share/backend/app/domain/files/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FileRecord:
    """
    Metadata view of one blob in the storage directory.
    `size` and `created_at` always come from the persisted blob, never from the client.
    """
    id: int
    stored_name: str
    original_name: str
    size: int
    content_type: str
    created_at: datetime
    is_encrypted: bool = False
