from __future__ import annotations

import logging

from lan_share.backend.app.domain.events import FileEvent
from lan_share.backend.app.infrastructure.realtime.connection_manager import ConnectionManager, frame

logger = logging.getLogger(__name__)


class WebSocketEventBus:
    """
    Fans registry events out to every connection open at publish time.
    At most once, no replay: a client that reconnects has to list again.
    """

    def __init__(self, connections: ConnectionManager) -> None:
        self._connections = connections

    async def publish(self, event: FileEvent) -> None:
        delivered = self._connections.broadcast(frame(str(event.kind), event.payload))
        logger.debug("Published %s to %d connection(s)", event.kind, delivered)
