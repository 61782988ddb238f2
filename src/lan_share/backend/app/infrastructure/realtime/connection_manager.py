from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def frame(event: str, data: Any = None) -> dict[str, Any]:
    """Every message on the push channel is {"event": ..., "data": ...}."""
    return {"event": event, "data": data}


class ClientConnection:
    """
    One open WebSocket plus its outbound queue.
    A single sender task drains the queue, so frames leave in the order they were queued.
    """

    def __init__(
        self,
        websocket: WebSocket,
        queue_size: int,
        on_send_failure: Callable[[str], None],
    ) -> None:
        self.id = uuid4().hex
        self.websocket = websocket
        client = websocket.client
        self.remote = f"{client.host}:{client.port}" if client else "unknown"
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self._on_send_failure = on_send_failure
        self._sender: Optional[asyncio.Task] = None

    def start(self) -> None:
        self._sender = asyncio.create_task(self._drain(), name=f"ws-sender-{self.id}")

    def enqueue(self, message: dict[str, Any]) -> bool:
        """Never blocks; returns False when the client is too far behind and the frame was dropped."""
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            return False
        return True

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def _drain(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self.websocket.send_json(message)
            except Exception as e:
                logger.warning("Could not send to connection %s (client may have disconnected): %s", self.id, e)
                self._on_send_failure(self.id)
                return

    def stop(self) -> None:
        sender = self._sender
        if sender and not sender.done() and sender is not asyncio.current_task():
            sender.cancel()


class ConnectionManager:
    """
    Registry of live push connections. Connections enter on connect and leave on
    disconnect or on the first failed send; nothing about a connection survives it.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self.active_connections: Dict[str, ClientConnection] = {}
        self._queue_size = queue_size

    async def connect(self, websocket: WebSocket, greeting: Callable[[ClientConnection], dict[str, Any]]) -> ClientConnection:
        """Accepts the socket, queues the greeting frame first, then starts receiving broadcasts."""
        await websocket.accept()
        connection = ClientConnection(websocket, self._queue_size, self.disconnect)
        connection.enqueue(greeting(connection))
        self.active_connections[connection.id] = connection
        connection.start()
        logger.info(
            "Client %s connected from %s. Total connections: %d",
            connection.id, connection.remote, len(self.active_connections),
        )
        return connection

    def disconnect(self, connection_id: str) -> None:
        connection = self.active_connections.pop(connection_id, None)
        if connection is None:
            return
        connection.stop()
        logger.info(
            "Client %s disconnected. Total connections: %d", connection_id, len(self.active_connections)
        )

    def get(self, connection_id: str) -> Optional[ClientConnection]:
        return self.active_connections.get(connection_id)

    def __len__(self) -> int:
        return len(self.active_connections)

    def broadcast(self, message: dict[str, Any]) -> int:
        """Queues the frame on every connection registered right now; returns how many accepted it."""
        delivered = 0
        for connection in list(self.active_connections.values()):
            if connection.enqueue(message):
                delivered += 1
            else:
                logger.warning(
                    "Dropping %s for slow connection %s (%d frames pending)",
                    message.get("event"), connection.id, connection.pending,
                )
        return delivered

    async def close_all(self, reason: str = "Server shutting down") -> None:
        for connection_id, connection in list(self.active_connections.items()):
            self.disconnect(connection_id)
            try:
                await connection.websocket.close(code=1001, reason=reason)
            except Exception as e:
                logger.debug("Closing connection %s failed: %s", connection_id, e)
