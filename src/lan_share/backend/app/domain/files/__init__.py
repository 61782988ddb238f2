from .entities import FileRecord
from .errors import (
    InvalidPath,
    NoPayload,
    PayloadTooLarge,
    StorageReadFailure,
    StorageWriteFailure,
    StoredFileNotFound,
)
from .value_objects import FileIdGenerator, StoredName, sanitize_original_name

__all__ = [
    "FileRecord",
    "StoredName",
    "FileIdGenerator",
    "sanitize_original_name",
    "InvalidPath",
    "NoPayload",
    "PayloadTooLarge",
    "StorageReadFailure",
    "StorageWriteFailure",
    "StoredFileNotFound",
]
