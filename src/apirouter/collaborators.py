"""Collaborator protocols — the capabilities the router calls but does not implement.

Each protocol is structural: any object with the right method satisfies it,
and each method may be ``def`` or ``async def``.

    Authenticator     -- who is making this request?
    PermissionChecker -- may this user do that?
    RequestLogger     -- record a finished request
"""

import logging
from typing import Any, Protocol, runtime_checkable

from apirouter.http.request import Request
from apirouter.http.response import Response


@runtime_checkable
class Authenticator(Protocol):
    """Establish the user behind a request.

    Return the user (any truthy value: a model, a dict, an id) or ``None``
    for an anonymous request. Raise only to trigger a 500 response.
    """

    def authenticate(self, request: Request) -> Any: ...


@runtime_checkable
class PermissionChecker(Protocol):
    """Decide whether an authenticated user holds a permission."""

    def has_permission(self, user: Any, permission: str) -> bool: ...


@runtime_checkable
class RequestLogger(Protocol):
    """Record a request after its response has been sent.

    *elapsed* is wall-clock seconds from the start of dispatch to just
    after ``send()``. *user* is the authenticated user or ``None``.
    """

    def log_request(
        self,
        request: Request,
        response: Response,
        elapsed: float,
        user: Any = None,
    ) -> None: ...


class LoggingRequestLogger:
    """A ``RequestLogger`` that writes one access line per request.

    Usage::

        router = Router(logger=LoggingRequestLogger())

    Lines look like ``GET /users/42 200 3.1ms user=42`` and go to the
    ``apirouter.access`` logger at INFO unless another logger or level is
    given.
    """

    __slots__ = ("_level", "_logger")

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("apirouter.access")
        self._level = level

    def log_request(
        self,
        request: Request,
        response: Response,
        elapsed: float,
        user: Any = None,
    ) -> None:
        user_id = getattr(user, "id", user) if user else "-"
        self._logger.log(
            self._level,
            "%s %s %d %.1fms user=%s",
            request.method,
            request.uri,
            response.status_code,
            elapsed * 1000,
            user_id,
        )
