"""ASGI adapter — serve a Router from any ASGI 3 server.

The adapter is the only component that touches raw ASGI. It reads the
request body, builds a ``Request``, and dispatches with a sender that
writes the response back through ASGI ``send()``::

    from apirouter import Router
    from apirouter.server.asgi import ASGIAdapter

    router = Router()
    router.get("/health", health)
    app = ASGIAdapter(router)   # hand `app` to the ASGI server
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from functools import partial
from typing import TYPE_CHECKING, Any, TypeAlias

from apirouter.http.request import Request
from apirouter.server.sender import Send, send_response

if TYPE_CHECKING:
    from apirouter.router import Router

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]

logger = logging.getLogger("apirouter.server")


async def read_body(receive: Receive) -> bytes:
    """Collect the full request body from ASGI ``http.request`` messages."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


class ASGIAdapter:
    """ASGI 3 application wrapping a ``Router``.

    HTTP scopes are dispatched; lifespan scopes are acknowledged and
    freeze the route table at startup. Other scope types are ignored.
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        body = await read_body(receive)
        request = Request.from_asgi(scope, body)
        await self.router.dispatch(request, sender=partial(send_response, send=send))

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self.router.freeze()
                logger.debug("Route table frozen with %d routes", len(self.router.routes))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
