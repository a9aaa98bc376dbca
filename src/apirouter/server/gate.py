"""Authentication and authorization gate.

Runs after routing and before any route middleware. The checks happen in a
fixed order and the first one that applies decides the outcome:

1. No route matched                          -> NOT_FOUND (404)
2. Route needs auth, no authenticator        -> ConfigurationError
3. Route needs a permission, no checker      -> ConfigurationError
4. Route needs auth, no user                 -> UNAUTHORIZED (401)
5. Checker refuses the required permission   -> FORBIDDEN (403)
6. Otherwise                                 -> PROCEED
"""

import logging
from enum import Enum
from typing import Any

from apirouter._internal.invoke import invoke
from apirouter.audit import emit_security_event
from apirouter.collaborators import Authenticator, PermissionChecker
from apirouter.errors import ConfigurationError
from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.routing.route import RouteMatch

logger = logging.getLogger("apirouter.server")


class GateOutcome(Enum):
    """Terminal states of the gate."""

    NOT_FOUND = (404, "Not Found")
    UNAUTHORIZED = (401, "Unauthorized")
    FORBIDDEN = (403, "Forbidden")
    PROCEED = (200, "")

    @property
    def status(self) -> int:
        return self.value[0]

    @property
    def error(self) -> str:
        return self.value[1]

    def write(self, response: Response) -> None:
        """Write the outcome's status and JSON error body to *response*."""
        response.set_status(self.status).set_json({"error": self.error})


async def authenticate(request: Request, authenticator: Authenticator | None) -> Any:
    """Ask the authenticator for the request's user.

    Returns the user, or ``None`` when there is no authenticator or the
    request is anonymous. A truthy user is stored on the request as the
    ``"user"`` attribute.
    """
    if authenticator is None:
        return None
    user = await invoke(authenticator.authenticate, request)
    if user:
        request.set_attribute("user", user)
    return user


async def evaluate(
    request: Request,
    match: RouteMatch | None,
    user: Any,
    *,
    authenticator: Authenticator | None,
    permissions: PermissionChecker | None,
) -> GateOutcome:
    """Decide whether the matched request may proceed.

    Raises ``ConfigurationError`` when the route declares a requirement the
    router has no collaborator for.
    """
    if match is None:
        logger.debug("404 %s %s", request.method, request.uri)
        return GateOutcome.NOT_FOUND

    route = match.route
    permission = route.required_permission

    if route.is_auth_required and authenticator is None:
        msg = (
            f"Route {route.method} {route.path!r} requires authentication "
            "but no authenticator was given to the router."
        )
        raise ConfigurationError(msg)

    if permission is not None and permissions is None:
        msg = (
            f"Route {route.method} {route.path!r} requires permission {permission!r} "
            "but no permission checker was given to the router."
        )
        raise ConfigurationError(msg)

    if route.is_auth_required and not user:
        logger.debug("401 %s %s", request.method, request.uri)
        emit_security_event(
            "auth.unauthorized",
            GateOutcome.UNAUTHORIZED.status,
            request=request,
            route=route,
            authenticated=False,
        )
        return GateOutcome.UNAUTHORIZED

    if permission is not None:
        assert permissions is not None
        allowed = await invoke(permissions.has_permission, user, permission)
        if not allowed:
            logger.debug("403 %s %s (missing %s)", request.method, request.uri, permission)
            emit_security_event(
                "auth.forbidden",
                GateOutcome.FORBIDDEN.status,
                request=request,
                route=route,
                authenticated=True,
            )
            return GateOutcome.FORBIDDEN

    return GateOutcome.PROCEED
