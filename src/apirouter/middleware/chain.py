"""Middleware chain composition.

A ``Chain`` is an ordered tuple of middleware plus a terminal stage. Running
it walks the tuple with an index cursor: each middleware receives a ``next``
bound to the following index, so a stage that never calls ``next`` stops
everything after it.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from functools import partial
from typing import TypeAlias

from apirouter._internal.invoke import invoke
from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.middleware.protocol import Middleware, Next
from apirouter.routing.route import RouteMatch

Terminal: TypeAlias = Callable[[Request, Response], Awaitable[None]]


async def _done(request: Request, response: Response) -> None:
    """Terminal stage of a chain with nothing at its end."""


@dataclass(frozen=True, slots=True)
class Chain:
    """An immutable middleware chain.

    Usage::

        chain = Chain.of([auth_header, timing], terminal=run_handler)
        await chain(request, response)

    Stages run in tuple order on the way in. Code a stage runs after
    ``await next(...)`` returns runs in reverse order on the way out.
    """

    stages: tuple[Middleware, ...] = ()
    terminal: Terminal = _done

    @classmethod
    def of(cls, stages: Sequence[Middleware], terminal: Terminal | None = None) -> "Chain":
        return cls(stages=tuple(stages), terminal=terminal or _done)

    async def __call__(self, request: Request, response: Response) -> None:
        await self._run(0, request, response)

    async def _run(self, index: int, request: Request, response: Response) -> None:
        if index == len(self.stages):
            await self.terminal(request, response)
            return
        stage = self.stages[index]
        next_stage: Next = partial(self._run, index + 1)
        await stage(request, response, next_stage)


def build_route_chain(
    match: RouteMatch,
    pre_route: Sequence[Middleware],
    post_route: Sequence[Middleware],
) -> Chain:
    """Compose the chain that runs once the gate lets a request through.

    Order on the way in::

        global PRE_ROUTE -> route pre -> handler -> route post -> global POST_ROUTE

    The handler is called as ``handler(request, response, params)`` and
    takes no ``next``; the post stages run after it returns. A pre stage
    that stops the chain therefore skips the handler and every post stage.
    """
    route = match.route
    post = Chain.of([*route.post_middleware, *post_route])

    async def run_handler(request: Request, response: Response) -> None:
        await invoke(route.handler, request, response, match.params)
        await post(request, response)

    return Chain.of([*pre_route, *route.pre_middleware], terminal=run_handler)
