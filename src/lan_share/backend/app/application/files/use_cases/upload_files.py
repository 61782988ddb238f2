from __future__ import annotations

import logging

from lan_share.backend.app.application.files.dto import (
    FailedUploadDTO,
    UploadFilesInputDTO,
    UploadFilesOutputDTO,
)
from lan_share.backend.app.application.files.mappers import file_record_domain_to_dto, files_uploaded_event
from lan_share.backend.app.application.files.use_cases.upload_file import store_one
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files import NoPayload, PayloadTooLarge, StorageWriteFailure
from lan_share.backend.app.domain.files.interfaces import FileStorage

logger = logging.getLogger(__name__)


class UploadFilesUseCase:
    """
    Each file is stored on its own: a failure excludes that file and nothing else.
    Files already written are never rolled back.
    """

    def __init__(self, storage: FileStorage, publisher: EventPublisher, max_upload_bytes: int) -> None:
        self._storage = storage
        self._publisher = publisher
        self._max_upload_bytes = max_upload_bytes

    async def execute(self, dto: UploadFilesInputDTO) -> UploadFilesOutputDTO:
        if not dto.files:
            raise NoPayload("No files uploaded")

        stored = []
        failed = []
        first_error: Exception | None = None
        for item in dto.files:
            try:
                record = await store_one(self._storage, item, self._max_upload_bytes)
            except (PayloadTooLarge, StorageWriteFailure) as e:
                logger.warning("Skipping %s in batch upload: %s", item.filename, e)
                failed.append(FailedUploadDTO(original_name=item.filename, reason=str(e)))
                first_error = first_error or e
                continue
            stored.append(file_record_domain_to_dto(record))

        if not stored:
            raise first_error

        await self._publisher.publish(files_uploaded_event(stored))
        return UploadFilesOutputDTO(stored=stored, failed=failed)
