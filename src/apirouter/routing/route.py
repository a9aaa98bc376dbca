"""Route registration record and RouteMatch result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from apirouter._internal.types import Handler, Params
from apirouter.routing.pattern import PathPattern, compile_template

if TYPE_CHECKING:
    from apirouter.middleware.protocol import Middleware


@dataclass(slots=True, eq=False)
class Route:
    """One registered (method, path template) mapping.

    Built during setup and read-only once the table freezes, after which the
    setters raise ``RuntimeError``. The requirement and middleware setters
    return the route so registration reads as one chain::

        router.get("/admin/users/{id}", show_user) \\
            .require_permission("users.read") \\
            .add_pre_middleware(audit)

    A route never holds matched parameters; ``RouteTable.match()`` returns
    them in a fresh ``RouteMatch`` per request.
    """

    method: str
    path: str
    handler: Handler
    pattern: PathPattern = field(init=False, repr=False)
    pre_middleware: list[Middleware] = field(default_factory=list, repr=False)
    post_middleware: list[Middleware] = field(default_factory=list, repr=False)
    requires_auth: bool = False
    required_permission: str | None = None
    _frozen: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.pattern = compile_template(self.path)

    # -- Requirements --

    def require_auth(self) -> Route:
        """Require an authenticated user."""
        self._check_not_frozen()
        self.requires_auth = True
        return self

    def require_permission(self, permission: str) -> Route:
        """Require *permission*. Implies authentication."""
        self._check_not_frozen()
        self.required_permission = permission
        return self

    @property
    def is_auth_required(self) -> bool:
        return self.requires_auth or self.required_permission is not None

    # -- Middleware --

    def add_pre_middleware(self, middleware: Middleware) -> Route:
        """Run *middleware* before the handler, after global pre-route middleware."""
        self._check_not_frozen()
        self.pre_middleware.append(middleware)
        return self

    def add_post_middleware(self, middleware: Middleware) -> Route:
        """Run *middleware* after the handler, before global post-route middleware."""
        self._check_not_frozen()
        self.post_middleware.append(middleware)
        return self

    # -- Freezing --

    def freeze(self) -> None:
        """Make the requirements and middleware read-only. Idempotent."""
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                f"Cannot change route {self.method} {self.path!r} after the router "
                "has started dispatching. Configure routes before the first request."
            )
            raise RuntimeError(msg)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: Params
