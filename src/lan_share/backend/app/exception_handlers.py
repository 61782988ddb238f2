import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from lan_share.backend.app.domain.files import (
    InvalidPath,
    NoPayload,
    PayloadTooLarge,
    StorageReadFailure,
    StorageWriteFailure,
    StoredFileNotFound,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoredFileNotFound)
    async def stored_file_not_found(_: Request, exc: StoredFileNotFound):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(InvalidPath)
    async def invalid_path(request: Request, exc: InvalidPath):
        logger.warning("Rejected file name %r from %s", exc.name, request.client.host if request.client else "?")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NoPayload)
    async def no_payload(_: Request, exc: NoPayload):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc) or "No file uploaded"},
        )

    @app.exception_handler(PayloadTooLarge)
    async def payload_too_large(_: Request, exc: PayloadTooLarge):
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"detail": str(exc)},
        )

    @app.exception_handler(StorageWriteFailure)
    async def storage_write_failure(_: Request, exc: StorageWriteFailure):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc) or "Failed to save file"},
        )

    @app.exception_handler(StorageReadFailure)
    async def storage_read_failure(_: Request, exc: StorageReadFailure):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception(_: Request, exc: Exception):
        logger.exception("Unhandled exception", exc_info=exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error"
            },
        )
