import logging
from typing import Iterable

from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

# part headers and boundaries on top of the payload itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class UploadSizeLimitMiddleware:
    """
    Caps the request body of the upload routes while it is still arriving.

    Multipart bodies are spooled to temporary files before a route runs, so the
    per-file check in storage alone would let an oversized upload fill the temp
    disk first. A declared Content-Length over the cap is refused before any
    body is read. A body without one is counted as it streams and cut off with
    413 once it passes the cap.
    """

    def __init__(self, app: ASGIApp, *, max_body_bytes: int, paths: Iterable[str], detail: str) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.paths = frozenset(paths)
        self.detail = detail

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST" or scope["path"] not in self.paths:
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None and declared > self.max_body_bytes:
            logger.warning("Refusing %s upload of %d bytes", scope["path"], declared)
            response = JSONResponse({"detail": self.detail}, status_code=413, headers={"Connection": "close"})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning("Cutting off %s upload after %d bytes", scope["path"], received)
                    raise HTTPException(status_code=413, detail=self.detail)
            return message

        await self.app(scope, limited_receive, send)


def _content_length(scope: Scope) -> int | None:
    for name, value in scope["headers"]:
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
