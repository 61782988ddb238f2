from typing import Annotated

from fastapi import Depends

from lan_share.backend.app.application.files.use_cases import (
    DeleteAllFilesUseCase,
    DeleteFileUseCase,
    DownloadFileUseCase,
    ListFilesUseCase,
    UploadFileUseCase,
    UploadFilesUseCase,
)
from lan_share.backend.app.core.config import Settings
from lan_share.backend.app.core.deps import get_event_publisher, get_file_storage, get_settings
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files.interfaces import FileStorage

storage_dep = Annotated[FileStorage, Depends(get_file_storage)]
publisher_dep = Annotated[EventPublisher, Depends(get_event_publisher)]
settings_dep = Annotated[Settings, Depends(get_settings)]


async def get_upload_file_use_case(
        storage: storage_dep,
        publisher: publisher_dep,
        settings: settings_dep,
) -> UploadFileUseCase:
    return UploadFileUseCase(storage, publisher, settings.MAX_UPLOAD_BYTES)


async def get_upload_files_use_case(
        storage: storage_dep,
        publisher: publisher_dep,
        settings: settings_dep,
) -> UploadFilesUseCase:
    return UploadFilesUseCase(storage, publisher, settings.MAX_UPLOAD_BYTES)


async def get_list_files_use_case(storage: storage_dep) -> ListFilesUseCase:
    return ListFilesUseCase(storage)


async def get_download_file_use_case(
        storage: storage_dep,
        settings: settings_dep,
) -> DownloadFileUseCase:
    return DownloadFileUseCase(storage, chunk_size=settings.UPLOAD_CHUNK_BYTES)


async def get_delete_file_use_case(
        storage: storage_dep,
        publisher: publisher_dep,
) -> DeleteFileUseCase:
    return DeleteFileUseCase(storage, publisher)


async def get_delete_all_files_use_case(
        storage: storage_dep,
        publisher: publisher_dep,
) -> DeleteAllFilesUseCase:
    return DeleteAllFilesUseCase(storage, publisher)
