"""ASGI response sending — translates a Response into ASGI messages."""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

from apirouter.http.response import Response

Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _latin1(text: str) -> bytes:
    # Header bytes on the wire are latin-1; unencodable characters become "?".
    return text.encode("latin-1", errors="replace")


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (_latin1(name.lower()), _latin1(value))
        for name, value in response.headers.items()
        if name.lower() != "content-length"
    ]

    body = response.content if _body_allowed(response.status_code) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status_code,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
