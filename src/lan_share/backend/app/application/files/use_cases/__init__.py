# lan_share/backend/app/application/files/use_cases/__init__.py
from .upload_file import UploadFileUseCase
from .upload_files import UploadFilesUseCase
from .list_files import ListFilesUseCase
from .download_file import DownloadFileUseCase
from .delete_file import DeleteFileUseCase
from .delete_all_files import DeleteAllFilesUseCase

__all__ = [
    "UploadFileUseCase",
    "UploadFilesUseCase",
    "ListFilesUseCase",
    "DownloadFileUseCase",
    "DeleteFileUseCase",
    "DeleteAllFilesUseCase",
]
