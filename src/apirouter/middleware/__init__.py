"""Middleware — Protocol-based, no inheritance required.

A middleware is any async callable matching:
    async def mw(request: Request, response: Response, next: Next) -> None

Register globally with ``Router.use(mw, Position.PRE_ROUTE)`` or per route
with ``route.add_pre_middleware(mw)`` / ``route.add_post_middleware(mw)``.
"""

from apirouter.middleware.chain import Chain, build_route_chain
from apirouter.middleware.protocol import Middleware, Next, Position

__all__ = [
    "Chain",
    "Middleware",
    "Next",
    "Position",
    "build_route_chain",
]
