import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lan_share.backend.app.api.files.public_files import PublicFiles
from lan_share.backend.app.api.files.upload_limit import MULTIPART_OVERHEAD_BYTES, UploadSizeLimitMiddleware
from lan_share.backend.app.api.realtime import router as realtime_router
from lan_share.backend.app.api.router import api_router
from lan_share.backend.app.application.files.mappers import PUBLIC_FILES_PREFIX
from lan_share.backend.app.core.config import Settings, settings
from lan_share.backend.app.core.context import AppContext, build_context
from lan_share.backend.app.core.logging_config import setup_logging
from lan_share.backend.app.domain.files import PayloadTooLarge
from lan_share.backend.app.exception_handlers import register_exception_handlers
from lan_share.backend.app.infrastructure.network.network_info import log_network_info, network_status

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
UPLOAD_PATHS = (f"{API_PREFIX}/upload", f"{API_PREFIX}/upload-multiple")


def log_startup_banner(context: AppContext) -> None:
    port = context.settings.PORT
    logger.info("=== File Transfer Server Started ===")
    logger.info("Local access: http://localhost:%s", port)
    logger.info("Network access: http://%s:%s", context.local_ip, port)
    logger.info("Upload directory: %s", context.storage.base_dir)
    logger.info("Network status: %s", network_status()["status"])
    log_network_info(port)
    if context.local_ip == "localhost":
        logger.warning("No network IP detected, only local access is available")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.LOG_LEVEL)
        try:
            context = build_context(app_settings)
        except OSError as e:
            logger.critical("Cannot use storage directory %s: %s", app_settings.FILE_STORAGE_DIR, e)
            raise
        app.state.context = context
        log_startup_banner(context)
        context.sweeper.start()
        try:
            yield
        finally:
            await context.sweeper.stop()
            await context.connections.close_all()

    app = FastAPI(title="LAN Share", lifespan=lifespan)
    app.add_middleware(
        UploadSizeLimitMiddleware,
        max_body_bytes=app_settings.MAX_UPLOAD_BYTES + MULTIPART_OVERHEAD_BYTES,
        paths=UPLOAD_PATHS,
        detail=str(PayloadTooLarge(app_settings.MAX_UPLOAD_BYTES)),
    )
    app.add_middleware(
        CORSMiddleware,
        # any device on the local network may open the UI from its own origin
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix=API_PREFIX)
    app.include_router(realtime_router.router)
    app.mount(
        PUBLIC_FILES_PREFIX,
        PublicFiles(directory=Path(app_settings.FILE_STORAGE_DIR).resolve(), check_dir=False),
        name="uploads",
    )

    register_exception_handlers(app)
    return app


app = create_app()
