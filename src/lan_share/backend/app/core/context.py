from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from lan_share.backend.app.application.expiry.sweep_expired_files import SweepExpiredFilesUseCase
from lan_share.backend.app.core.config import Settings
from lan_share.backend.app.infrastructure.expiry.sweeper import ExpirySweeper
from lan_share.backend.app.infrastructure.files.filesystem_storage import FilesystemFileStorage
from lan_share.backend.app.infrastructure.network.network_info import detect_local_ip
from lan_share.backend.app.infrastructure.realtime.connection_manager import ConnectionManager
from lan_share.backend.app.infrastructure.realtime.event_bus import WebSocketEventBus

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    Everything that lives for the whole process. Built once in the app lifespan and
    handed to routes through dependencies instead of module globals.
    """
    settings: Settings
    storage: FilesystemFileStorage
    connections: ConnectionManager
    events: WebSocketEventBus
    sweeper: ExpirySweeper
    local_ip: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _started_monotonic: float = field(default_factory=time.monotonic, repr=False)

    @property
    def uptime_seconds(self) -> float:
        return time.monotonic() - self._started_monotonic


def build_context(settings: Settings) -> AppContext:
    """
    Raises OSError when the storage directory cannot be created or read;
    the caller treats that as fatal.
    """
    storage = FilesystemFileStorage(Path(settings.FILE_STORAGE_DIR))
    storage.prepare()

    connections = ConnectionManager(queue_size=settings.EVENT_QUEUE_SIZE)
    events = WebSocketEventBus(connections)
    sweeper = ExpirySweeper(
        SweepExpiredFilesUseCase(
            storage,
            events,
            timedelta(seconds=settings.FILE_LIFETIME_SECONDS),
            publish_events=settings.SWEEP_PUBLISHES_EVENTS,
        ),
        interval_seconds=settings.SWEEP_INTERVAL_SECONDS,
    )

    try:
        local_ip = detect_local_ip()
    except Exception as e:
        logger.warning("Could not detect a network address: %s", e)
        local_ip = "localhost"

    return AppContext(
        settings=settings,
        storage=storage,
        connections=connections,
        events=events,
        sweeper=sweeper,
        local_ip=local_ip,
    )
