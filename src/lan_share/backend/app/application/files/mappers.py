from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from lan_share.backend.app.domain.events import FileEvent, FileEventKind
from lan_share.backend.app.domain.files import FileRecord

from .dto import FileRecordDTO

PUBLIC_FILES_PREFIX = "/uploads"


def to_iso(value: datetime) -> str:
    # same shape browsers produce with Date.toISOString()
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def file_url(stored_name: str) -> str:
    return f"{PUBLIC_FILES_PREFIX}/{quote(stored_name)}"


def file_record_domain_to_dto(record: FileRecord) -> FileRecordDTO:
    return FileRecordDTO(
        id=record.id,
        name=record.stored_name,
        original_name=record.original_name,
        size=record.size,
        content_type=record.content_type,
        uploaded_at=record.created_at,
        url=file_url(record.stored_name),
        is_encrypted=record.is_encrypted,
    )


def file_record_payload(dto: FileRecordDTO) -> dict[str, Any]:
    """
    Wire shape of an uploaded file, shared by the HTTP responses and the push events
    so a client can merge either into the same local list.
    """
    uploaded_at = to_iso(dto.uploaded_at)
    return {
        "id": dto.id,
        "name": dto.name,
        "originalName": dto.original_name,
        "size": dto.size,
        "type": dto.content_type,
        "timestamp": uploaded_at,
        "uploadDate": uploaded_at,
        "url": dto.url,
        "isEncrypted": dto.is_encrypted,
    }


def file_uploaded_event(dto: FileRecordDTO) -> FileEvent:
    return FileEvent(kind=FileEventKind.FILE_UPLOADED, payload=file_record_payload(dto))


def files_uploaded_event(dtos: list[FileRecordDTO]) -> FileEvent:
    return FileEvent(
        kind=FileEventKind.FILES_UPLOADED,
        payload=[file_record_payload(d) for d in dtos],
    )


def file_deleted_event(name: str) -> FileEvent:
    return FileEvent(kind=FileEventKind.FILE_DELETED, payload={"filename": name})


def all_files_deleted_event(deleted_count: int) -> FileEvent:
    return FileEvent(kind=FileEventKind.ALL_FILES_DELETED, payload={"deletedCount": deleted_count})
