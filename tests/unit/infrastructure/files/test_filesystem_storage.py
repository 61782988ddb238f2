from __future__ import annotations

import asyncio
import os
import time

import pytest

from lan_share.backend.app.domain.files import (
    FileIdGenerator,
    InvalidPath,
    PayloadTooLarge,
    StorageReadFailure,
    StoredFileNotFound,
)
from lan_share.backend.app.infrastructure.files.filesystem_storage import FilesystemFileStorage
from tests.unit.fakes.streams import broken_stream, chunks_of, stalled_stream


pytestmark = pytest.mark.asyncio


async def save(storage, name: str, data: bytes, **kwargs):
    return await storage.save(
        original_name=name,
        content_type="text/plain",
        chunks=chunks_of(data),
        max_bytes=kwargs.pop("max_bytes", 1024),
        **kwargs,
    )


async def read_all(storage, name: str) -> bytes:
    _, chunks = await storage.open_blob(name, chunk_size=3)
    return b"".join([c async for c in chunks])


class TestSave:
    async def test_writes_blob_and_reports_real_size(self, storage, storage_dir):
        record = await save(storage, "a.txt", b"0123456789", is_encrypted=True)

        assert record.size == 10
        assert record.original_name == "a.txt"
        assert record.stored_name.endswith("-a.txt")
        assert record.stored_name == f"{record.id}-a.txt"
        assert record.is_encrypted is True
        assert (storage_dir / record.stored_name).read_bytes() == b"0123456789"

    async def test_no_partial_file_left_after_success(self, storage, storage_dir):
        await save(storage, "a.txt", b"abc")
        assert [p.name for p in storage_dir.iterdir() if p.name.startswith(".")] == []

    async def test_same_name_twice_gets_distinct_stored_names(self, storage):
        first, second = await asyncio.gather(
            save(storage, "same.txt", b"one"),
            save(storage, "same.txt", b"two"),
        )
        assert first.stored_name != second.stored_name
        assert await read_all(storage, first.stored_name) == b"one"
        assert await read_all(storage, second.stored_name) == b"two"

    async def test_client_path_components_are_dropped(self, storage, storage_dir):
        record = await save(storage, "../../outside.txt", b"x")
        assert record.original_name == "outside.txt"
        assert (storage_dir / record.stored_name).exists()
        assert not (storage_dir.parent / "outside.txt").exists()

    async def test_too_large_is_rejected_and_cleaned_up(self, storage, storage_dir):
        with pytest.raises(PayloadTooLarge):
            await save(storage, "big.bin", b"x" * 20, max_bytes=10)
        assert list(storage_dir.iterdir()) == []

    async def test_exactly_the_limit_is_accepted(self, storage):
        record = await save(storage, "edge.bin", b"x" * 10, max_bytes=10)
        assert record.size == 10

    async def test_broken_stream_leaves_nothing_behind(self, storage, storage_dir):
        with pytest.raises(RuntimeError, match="client went away"):
            await storage.save(
                original_name="a.txt",
                content_type="text/plain",
                chunks=broken_stream(b"partial", RuntimeError("client went away")),
                max_bytes=1024,
            )
        assert list(storage_dir.iterdir()) == []
        assert await storage.list_files() == []

    async def test_cancelled_upload_leaves_nothing_behind(self, storage, storage_dir):
        started = asyncio.Event()
        task = asyncio.create_task(
            storage.save(
                original_name="a.txt",
                content_type="text/plain",
                chunks=stalled_stream(b"first chunk", started),
                max_bytes=1024,
            )
        )
        await started.wait()
        # the first chunk is already in the partial file
        assert [p.name for p in storage_dir.iterdir() if p.name.endswith(".part")]

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert list(storage_dir.iterdir()) == []
        assert await storage.list_files() == []

    async def test_empty_content_type_is_guessed(self, storage):
        record = await storage.save(
            original_name="photo.png",
            content_type="",
            chunks=chunks_of(b"png"),
            max_bytes=1024,
        )
        assert record.content_type == "image/png"


class TestListFiles:
    async def test_lists_what_is_on_disk(self, storage):
        record = await save(storage, "a.txt", b"0123456789")

        files = await storage.list_files()

        assert len(files) == 1
        listed = files[0]
        assert listed.id == record.id
        assert listed.stored_name == record.stored_name
        assert listed.original_name == "a.txt"
        assert listed.size == 10
        assert listed.content_type == "text/plain"

    async def test_rederives_from_directory_every_call(self, storage, storage_dir):
        record = await save(storage, "a.txt", b"abc")
        (storage_dir / record.stored_name).write_bytes(b"abcdef")
        (storage_dir / "manual.bin").write_bytes(b"12")

        files = {f.stored_name: f for f in await storage.list_files()}

        assert files[record.stored_name].size == 6
        assert files["manual.bin"].size == 2
        # no numeric prefix: the id falls back to the mtime in ms
        assert files["manual.bin"].id == int(os.stat(storage_dir / "manual.bin").st_mtime * 1000)

    async def test_ids_are_stable_across_listings(self, storage):
        await save(storage, "a.txt", b"a")
        await save(storage, "b.txt", b"b")

        first = sorted((f.stored_name, f.id) for f in await storage.list_files())
        second = sorted((f.stored_name, f.id) for f in await storage.list_files())

        assert first == second

    async def test_skips_partials_and_directories(self, storage, storage_dir):
        (storage_dir / ".1-a.txt.part").write_bytes(b"half")
        (storage_dir / "sub").mkdir()
        assert await storage.list_files() == []

    async def test_missing_directory_is_a_read_failure(self, tmp_path):
        fs = FilesystemFileStorage(tmp_path / "never-created")
        with pytest.raises(StorageReadFailure):
            await fs.list_files()


class TestOpenBlob:
    async def test_round_trip_is_byte_exact(self, storage):
        payload = bytes(range(256)) * 3
        record = await save(storage, "bin.dat", payload, max_bytes=10_000)

        listed, chunks = await storage.open_blob(record.stored_name, chunk_size=100)
        data = b"".join([c async for c in chunks])

        assert data == payload
        assert listed.size == len(payload)

    async def test_unknown_name_is_not_found(self, storage):
        with pytest.raises(StoredFileNotFound):
            await storage.open_blob("123-missing.txt", chunk_size=10)

    @pytest.mark.parametrize("name", ["..", "../secret.txt", "a/b", ".hidden"])
    async def test_traversal_is_rejected(self, storage, name):
        with pytest.raises(InvalidPath):
            await storage.open_blob(name, chunk_size=10)

    async def test_symlink_pointing_outside_is_rejected(self, storage, storage_dir, tmp_path):
        secret = tmp_path / "secret.txt"
        secret.write_text("secret")
        (storage_dir / "link.txt").symlink_to(secret)

        with pytest.raises(InvalidPath):
            await storage.open_blob("link.txt", chunk_size=10)

    async def test_directory_is_not_a_file(self, storage, storage_dir):
        (storage_dir / "folder").mkdir()
        with pytest.raises(StoredFileNotFound):
            await storage.open_blob("folder", chunk_size=10)


class TestDelete:
    async def test_delete_removes_blob(self, storage):
        record = await save(storage, "a.txt", b"abc")

        await storage.delete(record.stored_name)

        assert await storage.list_files() == []

    async def test_second_delete_is_not_found(self, storage):
        record = await save(storage, "a.txt", b"abc")
        await storage.delete(record.stored_name)

        with pytest.raises(StoredFileNotFound):
            await storage.delete(record.stored_name)

    async def test_delete_outside_directory_is_rejected(self, storage, tmp_path):
        victim = tmp_path / "victim.txt"
        victim.write_text("keep me")

        with pytest.raises(InvalidPath):
            await storage.delete("../victim.txt")
        assert victim.exists()


class TestPrepare:
    async def test_creates_directory_and_drops_partials(self, tmp_path):
        base = tmp_path / "uploads"
        base.mkdir()
        (base / ".5-a.txt.part").write_bytes(b"half")
        (base / "5-b.txt").write_bytes(b"done")

        fs = FilesystemFileStorage(base)
        fs.prepare()

        assert sorted(p.name for p in base.iterdir()) == ["5-b.txt"]

    async def test_new_ids_come_after_existing_ones(self, tmp_path):
        base = tmp_path / "uploads"
        base.mkdir()
        future_id = int(time.time() * 1000) + 10_000_000
        (base / f"{future_id}-old.txt").write_bytes(b"old")

        fs = FilesystemFileStorage(base, id_generator=FileIdGenerator())
        fs.prepare()
        record = await save(fs, "new.txt", b"new")

        assert record.id > future_id

    async def test_creates_missing_directory(self, tmp_path):
        fs = FilesystemFileStorage(tmp_path / "a" / "b")
        fs.prepare()
        assert (tmp_path / "a" / "b").is_dir()
