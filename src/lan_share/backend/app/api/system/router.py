from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from lan_share.backend.app.application.files.mappers import to_iso
from lan_share.backend.app.core.context import AppContext
from lan_share.backend.app.core.deps import get_context
from lan_share.backend.app.infrastructure.network.network_info import (
    interfaces_by_name,
    network_status,
)

router = APIRouter(tags=["system"])

context_dep = Annotated[AppContext, Depends(get_context)]


def access_urls(context: AppContext) -> dict[str, str]:
    port = context.settings.PORT
    return {
        "local": f"http://localhost:{port}",
        "network": f"http://{context.local_ip}:{port}",
    }


@router.get("/health")
def health():
    return {"status": "OK", "timestamp": to_iso(datetime.now(timezone.utc))}


@router.get("/server-info")
def server_info(request: Request, context: context_dep) -> dict[str, Any]:
    return {
        "host": request.url.hostname,
        "port": context.settings.PORT,
        "localIP": context.local_ip,
        "environment": context.settings.ENVIRONMENT,
        "uptime": round(context.uptime_seconds, 3),
        "startedAt": to_iso(context.started_at),
        "networkStatus": network_status(),
        "networkAccess": access_urls(context),
        "corsOrigins": ["*"],
        "connectedClients": len(context.connections),
        "storage": {
            "directory": str(context.storage.base_dir),
            "maxUploadBytes": context.settings.MAX_UPLOAD_BYTES,
            "fileLifetimeSeconds": context.settings.FILE_LIFETIME_SECONDS,
        },
    }


@router.get("/network-test")
def network_test(request: Request, context: context_dep) -> dict[str, Any]:
    status = network_status()
    return {
        "timestamp": to_iso(datetime.now(timezone.utc)),
        "status": status["status"],
        "hasNetwork": status["hasNetwork"],
        "detectedIP": context.local_ip,
        "allInterfaces": interfaces_by_name(),
        "requestInfo": {
            "clientIP": request.client.host if request.client else None,
            "origin": request.headers.get("origin"),
            "userAgent": request.headers.get("user-agent"),
        },
    }
