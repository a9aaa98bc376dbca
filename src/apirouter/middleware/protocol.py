"""Middleware protocol, Next type alias and registration positions.

A middleware is any callable matching::

    async def my_mw(request: Request, response: Response, next: Next) -> None: ...

No base class required. The router checks the shape, not the lineage.

Calling ``await next(request, response)`` runs the rest of the chain. Not
calling it stops the chain there; whatever the middleware wrote to the
response is what gets sent.
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol, TypeAlias

from apirouter.http.request import Request
from apirouter.http.response import Response

# The rest of the chain after the current stage
Next: TypeAlias = Callable[[Request, Response], Awaitable[None]]


class Middleware(Protocol):
    """Protocol for apirouter middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, response: Response, next: Next) -> None:
            start = time.perf_counter()
            await next(request, response)
            response.set_header("X-Time", f"{time.perf_counter() - start:.3f}")

        # Class middleware
        class RequireJSON:
            async def __call__(self, request: Request, response: Response, next: Next) -> None:
                if not request.is_json:
                    response.set_status(415).set_json({"error": "Unsupported Media Type"})
                    return
                await next(request, response)
    """

    async def __call__(self, request: Request, response: Response, next: Next) -> None: ...


class Position(Enum):
    """Where a global middleware runs.

    PRE_AUTH wraps authentication, routing and the gate, so it can stop a
    request before any of that work happens. PRE_ROUTE runs after the gate
    lets the request through, before route-specific middleware and the
    handler. POST_ROUTE runs after the handler and route-specific post
    middleware.
    """

    PRE_AUTH = 0
    PRE_ROUTE = 1
    POST_ROUTE = 2
