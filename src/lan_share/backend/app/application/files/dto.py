from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import AsyncIterable, AsyncIterator, Optional


@dataclass(frozen=True)
class UploadFileInputDTO:
    filename: str
    content_type: str
    chunks: AsyncIterable[bytes]
    is_encrypted: bool = False
    declared_size: Optional[int] = None  # advisory, from the multipart part if known


@dataclass(frozen=True)
class UploadFilesInputDTO:
    files: list[UploadFileInputDTO]


@dataclass(frozen=True)
class DownloadFileInputDTO:
    name: str


@dataclass(frozen=True)
class DeleteFileInputDTO:
    name: str


# ---------- OUTPUT DTOs ----------
@dataclass(frozen=True)
class FileRecordDTO:
    id: int
    name: str             # stored name, the addressing key
    original_name: str
    size: int
    content_type: str
    uploaded_at: datetime
    url: str
    is_encrypted: bool


@dataclass(frozen=True)
class FailedUploadDTO:
    original_name: str
    reason: str


@dataclass(frozen=True)
class UploadFilesOutputDTO:
    stored: list[FileRecordDTO]
    failed: list[FailedUploadDTO] = field(default_factory=list)


@dataclass(frozen=True)
class DownloadFileDTO:
    file: FileRecordDTO
    chunks: AsyncIterator[bytes]


@dataclass(frozen=True)
class DeleteAllFilesOutputDTO:
    deleted_count: int
    failed_count: int = 0
