from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from lan_share.backend.app.core.config import Settings
from lan_share.backend.app.core.context import AppContext
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files.interfaces import FileStorage
from lan_share.backend.app.infrastructure.realtime.connection_manager import ConnectionManager


def get_context(conn: HTTPConnection) -> AppContext:
    # HTTPConnection so the same dependency serves HTTP routes and the WebSocket
    return conn.app.state.context


def get_settings(context: Annotated[AppContext, Depends(get_context)]) -> Settings:
    return context.settings


def get_file_storage(context: Annotated[AppContext, Depends(get_context)]) -> FileStorage:
    """
    Swap implementation in build_context (FS / S3 / MinIO) without touching use cases.
    """
    return context.storage


def get_event_publisher(context: Annotated[AppContext, Depends(get_context)]) -> EventPublisher:
    return context.events


def get_connection_manager(context: Annotated[AppContext, Depends(get_context)]) -> ConnectionManager:
    return context.connections
