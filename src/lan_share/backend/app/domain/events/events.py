# lan_share/backend/app/domain/events/events.py
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol


class FileEventKind(StrEnum):
    FILE_UPLOADED = "fileUploaded"
    FILES_UPLOADED = "filesUploaded"
    FILE_DELETED = "fileDeleted"
    ALL_FILES_DELETED = "allFilesDeleted"


@dataclass(frozen=True, slots=True)
class FileEvent:
    kind: FileEventKind
    payload: Any  # small JSON-serializable value


class EventPublisher(Protocol):
    async def publish(self, event: FileEvent) -> None:
        """Best-effort fan-out. Must never raise because a client went away."""
        ...
