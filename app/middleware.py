"""
ASGI middleware capping request body size.
"""
import logging

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

BODY_TOO_LARGE = "request entity too large"


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than max_body_bytes with 413.

    A declared Content-Length is checked up front; bodies without one
    (chunked uploads) are counted as they are read.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(status_code=400, content={"error": "invalid Content-Length header"})
                await response(scope, receive, send)
                return
            if declared > self.max_body_bytes:
                logger.warning(f"Rejected {scope['path']}: declared body of {declared} bytes")
                response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning(f"Rejected {scope['path']}: body exceeded {self.max_body_bytes} bytes")
                    # Rendered by the app's HTTPException handler
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)
