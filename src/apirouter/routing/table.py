"""Ordered route table with group prefixes.

Registration order is match priority: the first route whose method and
template both match wins. Groups push a path prefix that applies to every
route registered inside them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from apirouter._internal.types import Handler
from apirouter.routing.route import Route, RouteMatch


class RouteTable:
    """Ordered route table with first-match-wins lookup.

    Usage::

        table = RouteTable()
        table.add("GET", "/users/{id}", show_user)
        table.group("/api", lambda t: t.add("GET", "/health", health))
        table.freeze()
        match = table.match("GET", "/users/42")  # RouteMatch(..., params={"id": "42"})

    Thread safety:
        Registration is single-threaded setup work. ``freeze()`` only ever
        sets flags to true, so concurrent calls are harmless; after it, the
        table and its routes are only read.
    """

    __slots__ = ("_frozen", "_prefix_stack", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._prefix_stack: list[str] = []
        self._frozen = False

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in match-priority order."""
        return tuple(self._routes)

    @property
    def prefix(self) -> str:
        """The prefix a route registered right now would receive."""
        return "".join(self._prefix_stack)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, method: str, path: str, handler: Handler) -> Route:
        """Register a route under the current group prefix."""
        self._check_not_frozen()
        route = Route(method=method, path=self.prefix + path, handler=handler)
        self._routes.append(route)
        return route

    def group(self, prefix: str, builder: Callable[[Any], Any], target: Any = None) -> None:
        """Register routes that share *prefix*.

        *builder* is called with *target* (the table itself by default) and
        every route it registers gets the prefix. Groups nest; prefixes
        concatenate outer to inner. A trailing ``/`` on *prefix* is dropped.
        """
        self._check_not_frozen()
        self._prefix_stack.append(prefix.rstrip("/"))
        try:
            builder(self if target is None else target)
        finally:
            self._prefix_stack.pop()

    def match(self, method: str, uri: str) -> RouteMatch | None:
        """Return the first route matching *method* and *uri*, or ``None``."""
        method = method.upper()
        for route in self._routes:
            if route.method != method:
                continue
            params = route.pattern.match(uri)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    def freeze(self) -> None:
        """Close registration on the table and every route in it. Idempotent."""
        if self._frozen:
            return
        for route in self._routes:
            route.freeze()
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the router has started dispatching. "
                "Register routes and groups before the first request."
            )
            raise RuntimeError(msg)
