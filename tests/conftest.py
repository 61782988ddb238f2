import pytest

from lan_share.backend.app.domain.files import FileIdGenerator
from lan_share.backend.app.infrastructure.files.filesystem_storage import FilesystemFileStorage
from tests.unit.fakes.event_publisher import FakeEventPublisher
from tests.unit.fakes.file_storage import FakeFileStorage


@pytest.fixture
def publisher() -> FakeEventPublisher:
    return FakeEventPublisher()


@pytest.fixture
def fake_storage() -> FakeFileStorage:
    return FakeFileStorage()


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(storage_dir) -> FilesystemFileStorage:
    fs = FilesystemFileStorage(storage_dir, id_generator=FileIdGenerator())
    fs.prepare()
    return fs
