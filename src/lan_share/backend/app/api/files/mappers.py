from typing import AsyncIterator, Optional
from urllib.parse import quote

from fastapi import UploadFile

from lan_share.backend.app.api.files.schemas import (
    DeleteAllFilesResponse,
    FailedUploadResponse,
    FileListItemResponse,
    UploadedFileResponse,
    UploadFileResponse,
    UploadFilesResponse,
)
from lan_share.backend.app.application.files.dto import (
    DeleteAllFilesOutputDTO,
    FileRecordDTO,
    UploadFileInputDTO,
    UploadFilesInputDTO,
    UploadFilesOutputDTO,
)
from lan_share.backend.app.application.files.mappers import file_record_payload, to_iso


async def iter_upload_chunks(file: UploadFile, chunk_size: int) -> AsyncIterator[bytes]:
    while chunk := await file.read(chunk_size):
        yield chunk


def _is_empty_part(file: Optional[UploadFile]) -> bool:
    # browsers send an empty, nameless part when nothing was picked
    return file is None or (not file.filename and not file.size)


def get_upload_file_input_dto(
        file: Optional[UploadFile],
        is_encrypted: bool,
        chunk_size: int,
) -> Optional[UploadFileInputDTO]:
    if _is_empty_part(file):
        return None
    return UploadFileInputDTO(
        filename=file.filename or "upload",
        # left empty when the client sent none, so storage and listings guess the same type
        content_type=file.content_type or "",
        chunks=iter_upload_chunks(file, chunk_size),
        is_encrypted=is_encrypted,
        declared_size=file.size,
    )


def get_upload_files_input_dto(
        files: Optional[list[UploadFile]],
        is_encrypted: bool,
        chunk_size: int,
) -> UploadFilesInputDTO:
    items = [get_upload_file_input_dto(f, is_encrypted, chunk_size) for f in files or []]
    return UploadFilesInputDTO(files=[i for i in items if i is not None])


def to_uploaded_file_response(dto: FileRecordDTO) -> UploadedFileResponse:
    return UploadedFileResponse.model_validate(file_record_payload(dto))


def to_file_list_item_response(dto: FileRecordDTO) -> FileListItemResponse:
    return FileListItemResponse(
        id=dto.id,
        name=dto.name,
        size=dto.size,
        upload_date=to_iso(dto.uploaded_at),
        type=dto.content_type,
        url=dto.url,
    )


def to_upload_file_response(dto: FileRecordDTO) -> UploadFileResponse:
    return UploadFileResponse(
        message="File uploaded successfully",
        file_path=to_uploaded_file_response(dto),
    )


def to_upload_files_response(dto: UploadFilesOutputDTO) -> UploadFilesResponse:
    message = "Files uploaded successfully"
    if dto.failed:
        message = f"Uploaded {len(dto.stored)} of {len(dto.stored) + len(dto.failed)} files"
    return UploadFilesResponse(
        message=message,
        file_paths=[to_uploaded_file_response(d) for d in dto.stored],
        failed=[FailedUploadResponse(original_name=f.original_name, reason=f.reason) for f in dto.failed],
    )


def to_delete_all_files_response(dto: DeleteAllFilesOutputDTO) -> DeleteAllFilesResponse:
    return DeleteAllFilesResponse(
        message=f"Deleted {dto.deleted_count} file(s)",
        deleted_count=dto.deleted_count,
    )


def content_disposition(filename: str) -> str:
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
