"""The apirouter Router.

Mutable during setup (routes, groups, middleware). The route table freezes
when the router dispatches its first request.
"""

from collections.abc import Callable
from dataclasses import replace
from typing import Any

import anyio

from apirouter._internal.types import Handler, Sender
from apirouter.collaborators import Authenticator, PermissionChecker, RequestLogger
from apirouter.config import RouterConfig
from apirouter.errors import ConfigurationError
from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.middleware.protocol import Middleware, Position
from apirouter.routing.route import Route
from apirouter.routing.table import RouteTable
from apirouter.server.handler import handle_request


class Router:
    """Maps (method, path) to handlers behind an auth gate and middleware.

    Usage::

        router = Router(authenticator=TokenAuth(), permissions=RoleCheck())

        router.get("/health", health)
        router.get("/me", me).require_auth()

        def admin(r: Router) -> None:
            r.get("/users/{id}", show_user).require_permission("users.read")
            r.delete("/users/{id}", delete_user).require_permission("users.delete")

        router.group("/admin", admin)
        router.use(cors, Position.PRE_AUTH)

        await router.dispatch(Request.build("GET", "/admin/users/42"))

    Collaborators are optional. A route that requires authentication or a
    permission the router has no collaborator for raises
    ``ConfigurationError`` when it is dispatched.

    Thread safety:
        Registration is single-threaded setup work. Once the first request
        is dispatched the router is only read, and any number of
        dispatches may run concurrently on it.
    """

    __slots__ = (
        "_authenticator",
        "_logger",
        "_middleware",
        "_permissions",
        "_sender",
        "_table",
        "config",
    )

    def __init__(
        self,
        logger: RequestLogger | None = None,
        authenticator: Authenticator | None = None,
        permissions: PermissionChecker | None = None,
        *,
        config: RouterConfig | None = None,
        sender: Sender | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._logger = logger
        self._authenticator = authenticator
        self._permissions = permissions
        self._sender = sender
        self._table = RouteTable()
        self._middleware: dict[Position, list[Middleware]] = {
            position: [] for position in Position
        }

    # -- Route registration --

    def get(self, path: str, handler: Handler) -> Route:
        return self.add_route("GET", path, handler)

    def post(self, path: str, handler: Handler) -> Route:
        return self.add_route("POST", path, handler)

    def put(self, path: str, handler: Handler) -> Route:
        return self.add_route("PUT", path, handler)

    def delete(self, path: str, handler: Handler) -> Route:
        return self.add_route("DELETE", path, handler)

    def add_route(self, method: str, path: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *path* under the current group prefix.

        Returns the ``Route`` so requirements and middleware can be chained.
        """
        return self._table.add(method, path, handler)

    def group(self, prefix: str, builder: Callable[["Router"], Any]) -> None:
        """Register a group of routes sharing *prefix*.

        *builder* receives this router. Groups nest::

            router.group("/api", lambda api: api.group("/v1", register_v1))
        """
        self._table.group(prefix, builder, target=self)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in match-priority order."""
        return self._table.routes

    # -- Middleware --

    def use(self, middleware: Middleware, position: Position | int = Position.PRE_ROUTE) -> None:
        """Add a global middleware at *position*.

        Raises ``ConfigurationError`` for an unknown position.
        """
        if self._table.frozen:
            msg = "Cannot add middleware after the router has started dispatching."
            raise RuntimeError(msg)
        try:
            if isinstance(position, bool):
                raise ValueError(position)
            position = Position(position)
        except ValueError:
            names = ", ".join(p.name for p in Position)
            msg = f"Invalid middleware position {position!r}; expected one of {names}."
            raise ConfigurationError(msg) from None
        self._middleware[position].append(middleware)

    # -- Configuration --

    def debug(self, enable: bool) -> None:
        """Turn debug detail in 500 responses on or off."""
        self.config = replace(self.config, debug=enable)

    # -- Dispatch --

    def freeze(self) -> None:
        """Close registration. Called automatically by the first dispatch."""
        self._table.freeze()

    async def dispatch(
        self,
        request: Request | None = None,
        *,
        sender: Sender | None = None,
    ) -> Response:
        """Handle one request and send its response.

        *sender* overrides the router's sender for this request only.
        Returns the sent response. ``ConfigurationError`` propagates;
        any other failure becomes a 500 response.
        """
        self._table.freeze()
        return await handle_request(
            request if request is not None else Request(),
            table=self._table,
            pre_auth=tuple(self._middleware[Position.PRE_AUTH]),
            pre_route=tuple(self._middleware[Position.PRE_ROUTE]),
            post_route=tuple(self._middleware[Position.POST_ROUTE]),
            config=self.config,
            authenticator=self._authenticator,
            permissions=self._permissions,
            logger=self._logger,
            sender=sender if sender is not None else self._sender,
        )

    def dispatch_sync(
        self,
        request: Request | None = None,
        *,
        sender: Sender | None = None,
    ) -> Response:
        """Blocking ``dispatch()`` for synchronous hosts (WSGI, CLI, threads).

        Runs the dispatch on a fresh event loop via ``anyio.run``. Must not
        be called from inside a running event loop.
        """
        return anyio.run(lambda: self.dispatch(request, sender=sender))
