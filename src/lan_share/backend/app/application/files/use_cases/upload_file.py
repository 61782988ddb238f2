from __future__ import annotations

import logging
from typing import Optional

from lan_share.backend.app.application.files.dto import FileRecordDTO, UploadFileInputDTO
from lan_share.backend.app.application.files.mappers import file_record_domain_to_dto, file_uploaded_event
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files import (
    FileRecord,
    NoPayload,
    PayloadTooLarge,
    StorageWriteFailure,
)
from lan_share.backend.app.domain.files.interfaces import FileStorage

logger = logging.getLogger(__name__)


async def store_one(storage: FileStorage, dto: UploadFileInputDTO, max_bytes: int) -> FileRecord:
    """Write one payload, translating anything unexpected into StorageWriteFailure."""
    if dto.declared_size is not None and dto.declared_size > max_bytes:
        raise PayloadTooLarge(max_bytes)
    try:
        return await storage.save(
            original_name=dto.filename,
            content_type=dto.content_type,
            chunks=dto.chunks,
            max_bytes=max_bytes,
            is_encrypted=dto.is_encrypted,
        )
    except (PayloadTooLarge, StorageWriteFailure):
        raise
    except Exception as e:
        logger.exception("Upload of %s failed", dto.filename)
        raise StorageWriteFailure(dto.filename) from e


class UploadFileUseCase:
    def __init__(self, storage: FileStorage, publisher: EventPublisher, max_upload_bytes: int) -> None:
        self._storage = storage
        self._publisher = publisher
        self._max_upload_bytes = max_upload_bytes

    async def execute(self, dto: Optional[UploadFileInputDTO]) -> FileRecordDTO:
        if dto is None:
            raise NoPayload()

        record = await store_one(self._storage, dto, self._max_upload_bytes)
        out = file_record_domain_to_dto(record)
        await self._publisher.publish(file_uploaded_event(out))
        return out
