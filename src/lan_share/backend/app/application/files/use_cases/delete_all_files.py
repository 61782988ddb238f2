from __future__ import annotations

import logging

from lan_share.backend.app.application.files.dto import DeleteAllFilesOutputDTO
from lan_share.backend.app.application.files.mappers import all_files_deleted_event
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files import StorageWriteFailure, StoredFileNotFound
from lan_share.backend.app.domain.files.interfaces import FileStorage

logger = logging.getLogger(__name__)


class DeleteAllFilesUseCase:
    def __init__(self, storage: FileStorage, publisher: EventPublisher) -> None:
        self._storage = storage
        self._publisher = publisher

    async def execute(self) -> DeleteAllFilesOutputDTO:
        # StorageReadFailure from the listing is the only error that escapes
        records = await self._storage.list_files()

        deleted = 0
        failed = 0
        for record in records:
            try:
                await self._storage.delete(record.stored_name)
            except StoredFileNotFound:
                logger.debug("%s already gone", record.stored_name)
                continue
            except StorageWriteFailure as e:
                logger.warning("Could not delete %s: %s", record.stored_name, e)
                failed += 1
                continue
            deleted += 1

        logger.info("Deleted %d of %d files", deleted, len(records))
        await self._publisher.publish(all_files_deleted_event(deleted))
        return DeleteAllFilesOutputDTO(deleted_count=deleted, failed_count=failed)
