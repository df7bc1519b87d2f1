# COMPONENT: API REQUEST / RESPONSE LOGGING MIDDLEWARE
# REQUIREMENTS SATISFIED: per-request timing and status logging
"""
greenery_api/api/middleware/log_requests.py

ASGI middleware that logs one line per HTTP request with method, path,
status code and end-to-end latency. Each request is tagged with a short
request id so it can be matched against the service log lines emitted
while it was being handled.

Request and response bodies are only logged at DEBUG level, and then
truncated: records carry contact details.
"""
import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ...utils.logging import get_logger

logger = get_logger("requests")

BODY_LOG_LIMIT = 512


def _preview(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    if len(text) > BODY_LOG_LIMIT:
        return text[:BODY_LOG_LIMIT] + "..."
    return text


class RequestLogger:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = str(uuid.uuid4())[:8]
        method = scope.get("method")
        path = scope.get("path")

        body_bytes = b""

        async def recv_wrapper() -> Message:
            nonlocal body_bytes
            msg = await receive()
            if msg["type"] == "http.request":
                body_bytes += msg.get("body", b"")
            return msg

        resp_body = b""
        status_code = None

        async def send_wrapper(message: Message):
            nonlocal resp_body, status_code

            if message["type"] == "http.response.start":
                status_code = message["status"]

            if message["type"] == "http.response.body":
                resp_body += message.get("body", b"")

            await send(message)

        start = time.perf_counter()
        try:
            await self.app(scope, recv_wrapper, send_wrapper)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(f"[RID {rid}] {method} {path} -> {status_code} ({duration_ms} ms)")
            logger.debug(f"[RID {rid}] request body: {_preview(body_bytes)}")
            logger.debug(f"[RID {rid}] response body: {_preview(resp_body)}")
