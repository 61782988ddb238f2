from pathlib import Path
from typing import AsyncIterable, AsyncIterator, Protocol, runtime_checkable

from lan_share.backend.app.domain.files.entities import FileRecord


@runtime_checkable
class FileStorage(Protocol):
    base_dir: Path

    async def save(
        self,
        *,
        original_name: str,
        content_type: str,
        chunks: AsyncIterable[bytes],
        max_bytes: int,
        is_encrypted: bool = False,
    ) -> FileRecord:
        """
        Persist the stream under a fresh stored name.
        Nothing is left behind in the directory when this raises.
        """
        ...

    async def list_files(self) -> list[FileRecord]:
        """Fresh enumeration of the directory on every call."""
        ...

    async def open_blob(
        self, name: str, *, chunk_size: int
    ) -> tuple[FileRecord, AsyncIterator[bytes]]:
        """
        Open the blob eagerly (raising StoredFileNotFound / InvalidPath up front)
        and return its record with an iterator over its bytes.
        """
        ...

    async def delete(self, name: str) -> None:
        ...
