import json
import logging
import time
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, WebSocket

from lan_share.backend.app.application.files.mappers import to_iso
from lan_share.backend.app.core.context import AppContext
from lan_share.backend.app.core.deps import get_context
from lan_share.backend.app.infrastructure.realtime.connection_manager import ClientConnection, frame

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def connected_frame(connection: ClientConnection, server_ip: str) -> dict[str, Any]:
    return frame("connected", {
        "message": "Connected to file transfer server",
        "serverId": connection.id,
        "timestamp": to_iso(datetime.now(timezone.utc)),
        "serverIP": server_ip,
    })


def pong_frame(data: Any) -> dict[str, Any]:
    client_timestamp = data.get("timestamp") if isinstance(data, dict) else None
    return frame("pong", {
        "timestamp": client_timestamp,
        "serverTime": int(time.time() * 1000),
    })


def handle_client_message(connection: ClientConnection, raw: str) -> None:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring non-JSON frame from %s", connection.id)
        return
    if not isinstance(message, dict):
        return

    if message.get("event") == "ping":
        # goes through the queue so the pong keeps its place behind earlier events
        connection.enqueue(pong_frame(message.get("data")))
    else:
        logger.debug("Ignoring unknown event %r from %s", message.get("event"), connection.id)


@router.websocket("/ws")
async def events_socket(websocket: WebSocket, context: Annotated[AppContext, Depends(get_context)]):
    manager = context.connections
    connection = await manager.connect(
        websocket,
        greeting=lambda c: connected_frame(c, context.local_ip),
    )
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            text = message.get("text")
            if text is None:
                logger.debug("Ignoring binary frame from %s", connection.id)
                continue
            handle_client_message(connection, text)
    finally:
        manager.disconnect(connection.id)
