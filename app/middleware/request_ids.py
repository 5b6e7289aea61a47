"""Request ID and correlation ID middleware.

Generates or forwards X-Request-ID and X-Correlation-ID, stores them on
scope state and echoes them on the response. Client-provided values are
sanitized (length + character set) before they reach the logs.
Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

ID_MAX_LENGTH = 64
ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize_id(raw: str | None) -> str | None:
    """Return the stripped value if it is a safe identifier, else None."""
    if not raw:
        return None
    value = raw.strip()
    if not ID_ALLOWED_PATTERN.match(value):
        return None
    return value


def _echo_header(send: Callable, header_name: str, value: str) -> Callable:
    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            headers.append((header_name.encode(), value.encode()))
            message["headers"] = headers
        await send(message)

    return send_wrapper


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request ID on each request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _sanitize_id(_get_header(scope, header_name)) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        await app(scope, receive, _echo_header(send, header_name, request_id))

    return asgi_app


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation ID; falls back to the request ID when absent.

    Must be inside RequestIDMiddleware so the request ID is already on scope state.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        state = scope.setdefault("state", {})
        correlation_id = (
            _sanitize_id(_get_header(scope, header_name))
            or state.get("request_id")
            or str(uuid.uuid4())
        )
        state["correlation_id"] = correlation_id
        await app(scope, receive, _echo_header(send, header_name, correlation_id))

    return asgi_app
