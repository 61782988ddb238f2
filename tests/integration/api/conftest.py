import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from lan_share.backend.app.core.config import Settings
from lan_share.backend.app.main import create_app


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        FILE_STORAGE_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_BYTES=1024,
        UPLOAD_CHUNK_BYTES=64,
        SWEEP_INTERVAL_SECONDS=3600,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as client:
        yield client


@pytest_asyncio.fixture
async def async_client(app_settings):
    # TestClient reads request bodies up front; ASGITransport pulls them chunk by chunk
    app = create_app(app_settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://lan-share.test") as client:
            yield client


@pytest.fixture
def upload(client):
    def _upload(name: str, data: bytes, content_type: str = "text/plain", **form):
        return client.post("/api/upload", files={"file": (name, data, content_type)}, data=form)

    return _upload
