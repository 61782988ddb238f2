# lan_share/backend/app/application/files/use_cases/list_files.py
from __future__ import annotations

from typing import List

from lan_share.backend.app.application.files.dto import FileRecordDTO
from lan_share.backend.app.application.files.mappers import file_record_domain_to_dto
from lan_share.backend.app.domain.files.interfaces import FileStorage


class ListFilesUseCase:
    # Always re-reads the directory. Uploads or deletes racing with the scan may or may not show up.
    def __init__(self, storage: FileStorage) -> None:
        self._storage = storage

    async def execute(self) -> List[FileRecordDTO]:
        records = await self._storage.list_files()
        return [file_record_domain_to_dto(r) for r in records]
