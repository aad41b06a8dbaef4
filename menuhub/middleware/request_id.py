"""Request ID middleware (raw ASGI).

Forwards a well-formed client request ID or generates one, echoes it on
the response, and exposes it to log records through a context variable.
"""

import re
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from menuhub.shared.context import reset_request_id, set_request_id

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,%d}" % REQUEST_ID_MAX_LENGTH)


def sanitize_request_id(raw: str | None) -> str:
    """Keep raw if it is a short token of safe characters; otherwise mint a UUID4."""
    value = (raw or "").strip()
    if _REQUEST_ID_RE.fullmatch(value):
        return value
    return uuid.uuid4().hex


class RequestIDMiddleware:
    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _incoming(self, scope: Scope) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request_id = sanitize_request_id(self._incoming(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        token = set_request_id(request_id)

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (self._header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)
