from __future__ import annotations

from lan_share.backend.app.application.files.dto import DownloadFileDTO, DownloadFileInputDTO
from lan_share.backend.app.application.files.mappers import file_record_domain_to_dto
from lan_share.backend.app.domain.files.interfaces import FileStorage


class DownloadFileUseCase:
    def __init__(self, storage: FileStorage, chunk_size: int) -> None:
        self._storage = storage
        self._chunk_size = chunk_size

    async def execute(self, dto: DownloadFileInputDTO) -> DownloadFileDTO:
        record, chunks = await self._storage.open_blob(dto.name, chunk_size=self._chunk_size)
        return DownloadFileDTO(file=file_record_domain_to_dto(record), chunks=chunks)
