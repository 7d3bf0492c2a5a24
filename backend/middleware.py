"""Request body ceilings applied before Starlette reads or spools the body.

JSON bodies are held to `json_limit`. Multipart bodies are held to
`upload_limit` plus room for the form framing; the per-file cap in
services.uploads still applies to the stored file. A declared Content-Length
over the limit is refused up front, and the body is counted as it streams so
chunked requests stop at the same ceiling.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from backend.routers.common import api_error


logger = logging.getLogger("backend.middleware")

FORM_OVERHEAD = 64 * 1024


def media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


class BodyLimitMiddleware:
    def __init__(self, app: ASGIApp, json_limit: int, upload_limit: int):
        self.app = app
        self.json_limit = json_limit
        self.upload_limit = upload_limit

    def limit_for(self, content_type: str) -> Optional[Tuple[int, str]]:
        """Byte ceiling and 413 hint for a content type, or None when unlimited."""
        kind = media_type(content_type)
        if kind == "application/json" or kind.endswith("+json"):
            return self.json_limit, f"Keep JSON bodies under {self.json_limit} bytes."
        if kind == "multipart/form-data":
            return self.upload_limit + FORM_OVERHEAD, f"Keep uploads under {self.upload_limit} bytes."
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        rule = self.limit_for(headers.get("content-type", ""))
        if rule is None:
            await self.app(scope, receive, send)
            return

        limit, hint = rule
        length = headers.get("content-length", "")
        if length.isdigit() and int(length) > limit:
            logger.warning(f"⚠️ Body too large: {length} bytes declared on {scope['path']}")
            response = JSONResponse(status_code=413, content={"error": "payload_too_large", "hint": hint})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    logger.warning(f"⚠️ Body too large: over {limit} bytes streamed on {scope['path']}")
                    raise api_error(413, "payload_too_large", hint=hint)
            return message

        await self.app(scope, limited_receive, send)
