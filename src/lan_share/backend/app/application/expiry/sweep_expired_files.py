from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from lan_share.backend.app.application.files.mappers import file_deleted_event
from lan_share.backend.app.domain.events import EventPublisher
from lan_share.backend.app.domain.files import StorageWriteFailure, StoredFileNotFound
from lan_share.backend.app.domain.files.interfaces import FileStorage

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SweepExpiredFilesUseCase:
    """
    Removes every blob whose modification time is older than `lifetime`.

    When `publish_events` is on, each removal is announced with the same
    fileDeleted event an explicit delete produces. When off, clients only notice
    on their next listing.
    """

    def __init__(
        self,
        storage: FileStorage,
        publisher: EventPublisher,
        lifetime: timedelta,
        *,
        publish_events: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._storage = storage
        self._publisher = publisher
        self._lifetime = lifetime
        self._publish_events = publish_events
        self._clock = clock

    async def execute(self) -> list[str]:
        now = self._clock()
        records = await self._storage.list_files()

        removed: list[str] = []
        for record in records:
            if now - record.created_at <= self._lifetime:
                continue
            try:
                await self._storage.delete(record.stored_name)
            except StoredFileNotFound:
                # deleted by a client since the scan
                continue
            except StorageWriteFailure as e:
                logger.warning("Could not expire %s: %s", record.stored_name, e)
                continue
            removed.append(record.stored_name)
            if self._publish_events:
                await self._publisher.publish(file_deleted_event(record.stored_name))

        if removed:
            logger.info("Expired %d file(s): %s", len(removed), ", ".join(removed))
        return removed
