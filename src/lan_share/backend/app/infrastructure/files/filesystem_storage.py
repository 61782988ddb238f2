from __future__ import annotations

import logging
import mimetypes
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterable, AsyncIterator, Optional

import anyio
from anyio import AsyncFile

from lan_share.backend.app.domain.files import (
    FileIdGenerator,
    FileRecord,
    InvalidPath,
    PayloadTooLarge,
    StorageReadFailure,
    StorageWriteFailure,
    StoredFileNotFound,
    StoredName,
    sanitize_original_name,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
PARTIAL_SUFFIX = ".part"


def guess_content_type(name: str) -> str:
    content_type, _ = mimetypes.guess_type(name)
    return content_type or DEFAULT_CONTENT_TYPE


def _is_partial(name: str) -> bool:
    return name.startswith(".") and name.endswith(PARTIAL_SUFFIX)


class FilesystemFileStorage:
    """
    The storage directory is the only source of truth: there is no index file and
    no in-memory cache, every listing is a scandir plus one stat per entry.

    Uploads are written to a hidden ".<stored name>.part" file and renamed into
    place once complete, so a listing never sees a half written blob.
    """

    def __init__(self, base_dir: Path, id_generator: Optional[FileIdGenerator] = None) -> None:
        self._base_dir = Path(base_dir).resolve()
        self._ids = id_generator or FileIdGenerator()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def prepare(self) -> None:
        """
        Create the directory, drop partial uploads left by a previous process and
        move the id generator past every id already on disk.
        Runs once at startup, before any request is served.
        """
        self._base_dir.mkdir(parents=True, exist_ok=True)
        highest = 0
        with os.scandir(self._base_dir) as entries:
            for entry in entries:
                if _is_partial(entry.name):
                    try:
                        os.unlink(entry.path)
                        logger.info("Removed leftover partial upload %s", entry.name)
                    except OSError as e:
                        logger.warning("Could not remove partial upload %s: %s", entry.name, e)
                    continue
                try:
                    file_id = StoredName(entry.name).file_id
                except InvalidPath:
                    continue
                if file_id is not None:
                    highest = max(highest, file_id)
        self._ids.advance_past(highest)

    def resolve(self, name: str) -> Path:
        """
        Map a client supplied stored name to a path that is guaranteed to be a
        direct child of the storage directory.
        """
        stored = StoredName(name)
        candidate = (self._base_dir / stored.value).resolve()
        if candidate.parent != self._base_dir:
            raise InvalidPath(name)
        return candidate

    # ---------- writes ----------

    async def save(
        self,
        *,
        original_name: str,
        content_type: str,
        chunks: AsyncIterable[bytes],
        max_bytes: int,
        is_encrypted: bool = False,
    ) -> FileRecord:
        display_name = sanitize_original_name(original_name)
        file_id = self._ids.next_id()
        stored = StoredName.compose(file_id, display_name)
        final_path = self._base_dir / stored.value
        part_path = self._base_dir / f".{stored.value}{PARTIAL_SUFFIX}"

        written = 0
        try:
            async with await anyio.open_file(part_path, "xb") as f:
                async for chunk in chunks:
                    written += len(chunk)
                    if written > max_bytes:
                        raise PayloadTooLarge(max_bytes)
                    await f.write(chunk)
            await anyio.Path(part_path).rename(final_path)
            stat = await anyio.Path(final_path).stat()
        except OSError as e:
            await self._discard(part_path, final_path)
            logger.error("Writing %s failed: %s", stored.value, e)
            raise StorageWriteFailure(display_name, reason=e.strerror or str(e)) from e
        except BaseException:
            # too large, cancelled, or the client stream broke
            await self._discard(part_path, final_path)
            raise

        logger.info("Stored %s (%d bytes)", stored.value, stat.st_size)
        return FileRecord(
            id=file_id,
            stored_name=stored.value,
            original_name=display_name,
            size=stat.st_size,
            content_type=content_type or guess_content_type(display_name),
            created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            is_encrypted=is_encrypted,
        )

    async def delete(self, name: str) -> None:
        path = self.resolve(name)
        try:
            await anyio.Path(path).unlink()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise StoredFileNotFound(name) from e
        except OSError as e:
            raise StorageWriteFailure(name, reason=e.strerror or str(e)) from e
        logger.info("Deleted %s", name)

    async def _discard(self, *paths: Path) -> None:
        # must run even when the surrounding scope is being cancelled
        with anyio.CancelScope(shield=True):
            for path in paths:
                try:
                    await anyio.Path(path).unlink(missing_ok=True)
                except OSError as e:
                    logger.warning("Could not remove %s: %s", path.name, e)

    # ---------- reads ----------

    async def list_files(self) -> list[FileRecord]:
        try:
            return await anyio.to_thread.run_sync(self._scan)
        except OSError as e:
            logger.error("Listing %s failed: %s", self._base_dir, e)
            raise StorageReadFailure(e.strerror or str(e)) from e

    def _scan(self) -> list[FileRecord]:
        records: list[FileRecord] = []
        with os.scandir(self._base_dir) as entries:
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    stat = entry.stat(follow_symlinks=False)
                except OSError as e:
                    # removed between scandir and stat
                    logger.debug("Skipping %s: %s", entry.name, e)
                    continue
                try:
                    records.append(self._record_from_stat(entry.name, stat))
                except InvalidPath:
                    logger.warning("Ignoring unaddressable file %r", entry.name)
        return records

    def _record_from_stat(self, name: str, stat: os.stat_result) -> FileRecord:
        stored = StoredName(name)
        file_id = stored.file_id
        if file_id is None:
            # dropped into the directory by hand, fall back to its mtime
            file_id = int(stat.st_mtime * 1000)
        return FileRecord(
            id=file_id,
            stored_name=name,
            original_name=stored.original_name,
            size=stat.st_size,
            content_type=guess_content_type(stored.original_name),
            created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )

    async def open_blob(
        self, name: str, *, chunk_size: int
    ) -> tuple[FileRecord, AsyncIterator[bytes]]:
        path = self.resolve(name)
        try:
            f = await anyio.open_file(path, "rb")
        except (FileNotFoundError, IsADirectoryError) as e:
            raise StoredFileNotFound(name) from e
        except OSError as e:
            raise StorageReadFailure(e.strerror or str(e)) from e

        try:
            stat = await anyio.to_thread.run_sync(os.fstat, f.wrapped.fileno())
        except BaseException:
            with anyio.CancelScope(shield=True):
                await f.aclose()
            raise

        return self._record_from_stat(path.name, stat), self._iter_file(f, chunk_size)

    @staticmethod
    async def _iter_file(f: AsyncFile[bytes], chunk_size: int) -> AsyncIterator[bytes]:
        try:
            while chunk := await f.read(chunk_size):
                yield chunk
        finally:
            with anyio.CancelScope(shield=True):
                await f.aclose()
