"""Per-request pipeline.

One call to ``handle_request`` is one request/response cycle:

    PRE_AUTH middleware
        -> authenticate -> match -> gate
        -> PRE_ROUTE + route pre middleware -> handler -> route post + POST_ROUTE middleware
    -> send -> log

Everything that belongs to a single request (the user, the matched
parameters, the start time) lives on a ``DispatchContext`` created here,
never on the router or on a route, so concurrent dispatches on one router
can't see each other's state.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from apirouter._internal.invoke import invoke
from apirouter._internal.types import Sender
from apirouter.collaborators import Authenticator, PermissionChecker, RequestLogger
from apirouter.config import RouterConfig
from apirouter.errors import ConfigurationError
from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.middleware.chain import Chain, build_route_chain
from apirouter.middleware.protocol import Middleware
from apirouter.routing.route import RouteMatch
from apirouter.routing.table import RouteTable
from apirouter.server.errors import handle_internal_error
from apirouter.server.gate import GateOutcome, authenticate, evaluate


@dataclass(slots=True)
class DispatchContext:
    """State scoped to exactly one dispatch."""

    request: Request
    response: Response
    started: float = field(default_factory=time.perf_counter)
    user: Any = None
    match: RouteMatch | None = None


async def handle_request(
    request: Request,
    *,
    table: RouteTable,
    pre_auth: Sequence[Middleware],
    pre_route: Sequence[Middleware],
    post_route: Sequence[Middleware],
    config: RouterConfig,
    authenticator: Authenticator | None = None,
    permissions: PermissionChecker | None = None,
    logger: RequestLogger | None = None,
    sender: Sender | None = None,
) -> Response:
    """Process a single request through the full pipeline.

    Returns the response after it has been sent and logged. Raises
    ``ConfigurationError`` (without sending anything) when a matched route
    needs a collaborator the router was built without.
    """
    ctx = DispatchContext(request=request, response=Response(sender=sender))

    async def route_request(req: Request, res: Response) -> None:
        ctx.user = await authenticate(req, authenticator)
        ctx.match = table.match(req.method, req.uri)
        outcome = await evaluate(
            req,
            ctx.match,
            ctx.user,
            authenticator=authenticator,
            permissions=permissions,
        )
        if outcome is not GateOutcome.PROCEED:
            outcome.write(res)
            return
        assert ctx.match is not None
        chain = build_route_chain(ctx.match, pre_route, post_route)
        await chain(req, res)

    try:
        await Chain.of(pre_auth, terminal=route_request)(ctx.request, ctx.response)
    except ConfigurationError:
        raise
    except Exception as exc:
        handle_internal_error(exc, ctx.request, ctx.response, config)

    # A handler or middleware may already have sent the response itself.
    if not ctx.response.sent:
        await ctx.response.send()

    if logger is not None:
        elapsed = time.perf_counter() - ctx.started
        await invoke(logger.log_request, ctx.request, ctx.response, elapsed, ctx.user)

    return ctx.response
