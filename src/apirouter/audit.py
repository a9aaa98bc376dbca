"""Auth gate refusals as structured events.

When the gate turns a matched request away it reports one ``SecurityEvent``
to a process-wide sink, if one is installed::

    set_security_event_sink(lambda event: siem.submit(event.name, event.status))

``auth.unauthorized`` (401) means the route needs a user and none was
authenticated. ``auth.forbidden`` (403) means a user was authenticated but
the permission checker refused the route's permission. Unmatched requests
(404) are not security events.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from apirouter.http.request import Request
    from apirouter.routing.route import Route


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A request the auth gate refused.

    Attributes:
        name: ``auth.unauthorized`` or ``auth.forbidden``.
        status: HTTP status written for the refusal.
        method: Request method.
        uri: Request path, without the query string.
        route: Template of the matched route, e.g. ``/users/{id}``.
        permission: The route's required permission, if any.
        authenticated: Whether a user had been authenticated.
    """

    name: str
    status: int
    method: str
    uri: str
    route: str
    permission: str | None = None
    authenticated: bool = False
    timestamp: float = field(default_factory=time)


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Install the sink for gate refusals. ``None`` turns reporting off."""
    global _sink
    with _sink_lock:
        _sink = sink


def emit_security_event(
    name: str,
    status: int,
    *,
    request: "Request",
    route: "Route",
    authenticated: bool,
) -> None:
    """Report one refusal of *request* on *route* to the installed sink."""
    with _sink_lock:
        sink = _sink
    if sink is None:
        return
    sink(
        SecurityEvent(
            name=name,
            status=status,
            method=request.method,
            uri=request.uri,
            route=route.path,
            permission=route.required_permission,
            authenticated=authenticated,
        )
    )
