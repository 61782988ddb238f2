from __future__ import annotations

from lan_share.backend.app.application.files.dto import DeleteFileInputDTO
from lan_share.backend.app.application.files.mappers import file_deleted_event
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files.interfaces import FileStorage


class DeleteFileUseCase:
    """
    Deleting a missing file raises StoredFileNotFound. When two clients delete the
    same file at once the loser sees that error; the file is gone either way.
    """

    def __init__(self, storage: FileStorage, publisher: EventPublisher) -> None:
        self._storage = storage
        self._publisher = publisher

    async def execute(self, dto: DeleteFileInputDTO) -> None:
        await self._storage.delete(dto.name)
        await self._publisher.publish(file_deleted_event(dto.name))
