from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import StreamingResponse

from lan_share.backend.app.api.files.deps import (
    get_delete_all_files_use_case,
    get_delete_file_use_case,
    get_download_file_use_case,
    get_list_files_use_case,
    get_upload_file_use_case,
    get_upload_files_use_case,
    settings_dep,
)
from lan_share.backend.app.api.files.mappers import (
    content_disposition,
    get_upload_file_input_dto,
    get_upload_files_input_dto,
    to_delete_all_files_response,
    to_file_list_item_response,
    to_upload_file_response,
    to_upload_files_response,
)
from lan_share.backend.app.api.files.schemas import (
    DeleteAllFilesResponse,
    FileListItemResponse,
    MessageResponse,
    UploadFileResponse,
    UploadFilesResponse,
)
from lan_share.backend.app.application.files.dto import DeleteFileInputDTO, DownloadFileInputDTO
from lan_share.backend.app.application.files.use_cases import (
    DeleteAllFilesUseCase,
    DeleteFileUseCase,
    DownloadFileUseCase,
    ListFilesUseCase,
    UploadFileUseCase,
    UploadFilesUseCase,
)

router = APIRouter(tags=["files"])

upload_file_dep = Annotated[UploadFileUseCase, Depends(get_upload_file_use_case)]
upload_files_dep = Annotated[UploadFilesUseCase, Depends(get_upload_files_use_case)]
list_files_dep = Annotated[ListFilesUseCase, Depends(get_list_files_use_case)]
download_file_dep = Annotated[DownloadFileUseCase, Depends(get_download_file_use_case)]
delete_file_dep = Annotated[DeleteFileUseCase, Depends(get_delete_file_use_case)]
delete_all_files_dep = Annotated[DeleteAllFilesUseCase, Depends(get_delete_all_files_use_case)]


@router.get("/files", response_model=list[FileListItemResponse])
async def list_files(use_case: list_files_dep):
    files = await use_case.execute()
    return [to_file_list_item_response(f) for f in files]


@router.post("/upload", response_model=UploadFileResponse)
async def upload_file(
        use_case: upload_file_dep,
        settings: settings_dep,
        file: Annotated[Optional[UploadFile], File()] = None,
        is_encrypted: Annotated[bool, Form(alias="isEncrypted")] = False,
):
    dto = get_upload_file_input_dto(file, is_encrypted, settings.UPLOAD_CHUNK_BYTES)
    stored = await use_case.execute(dto)
    return to_upload_file_response(stored)


@router.post("/upload-multiple", response_model=UploadFilesResponse)
async def upload_files(
        use_case: upload_files_dep,
        settings: settings_dep,
        files: Annotated[Optional[list[UploadFile]], File()] = None,
        is_encrypted: Annotated[bool, Form(alias="isEncrypted")] = False,
):
    dto = get_upload_files_input_dto(files, is_encrypted, settings.UPLOAD_CHUNK_BYTES)
    out = await use_case.execute(dto)
    return to_upload_files_response(out)


@router.get("/download/{name}")
async def download_file(name: str, use_case: download_file_dep) -> StreamingResponse:
    out = await use_case.execute(DownloadFileInputDTO(name=name))
    headers = {
        "Content-Disposition": content_disposition(out.file.name),
        "Content-Length": str(out.file.size),
    }
    return StreamingResponse(out.chunks, media_type="application/octet-stream", headers=headers)


@router.delete("/delete-all", response_model=DeleteAllFilesResponse)
async def delete_all_files(use_case: delete_all_files_dep):
    out = await use_case.execute()
    return to_delete_all_files_response(out)


@router.delete("/delete/{name}", response_model=MessageResponse)
async def delete_file(name: str, use_case: delete_file_dep):
    await use_case.execute(DeleteFileInputDTO(name=name))
    return MessageResponse(message="File deleted successfully")
