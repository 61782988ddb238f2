from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Browser clients speak camelCase; fields stay snake_case on the Python side."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileListItemResponse(CamelModel):
    id: int
    name: str
    size: int
    upload_date: str
    type: str
    url: str


class UploadedFileResponse(CamelModel):
    id: int
    name: str
    original_name: str
    size: int
    type: str
    timestamp: str
    upload_date: str
    url: str
    is_encrypted: bool


class FailedUploadResponse(CamelModel):
    original_name: str
    reason: str


class UploadFileResponse(CamelModel):
    message: str
    file_path: UploadedFileResponse


class UploadFilesResponse(CamelModel):
    message: str
    file_paths: list[UploadedFileResponse]
    failed: list[FailedUploadResponse] = []


class MessageResponse(BaseModel):
    message: str


class DeleteAllFilesResponse(CamelModel):
    message: str
    deleted_count: int
