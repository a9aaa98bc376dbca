"""apirouter — a small async HTTP request router.

Maps (method, path) to handlers, gates routes behind authentication and
permissions, and runs handlers through an ordered, short-circuitable
middleware chain. The host owns the socket; the router takes a ``Request``
and hands the finished ``Response`` to a sender.

Basic usage::

    from apirouter import Request, Router

    router = Router()

    def show_user(request, response, params):
        response.set_json({"id": params["id"]})

    router.get("/users/{id}", show_user)

    await router.dispatch(Request.build("GET", "/users/42"))
"""

__version__ = "0.1.0"
__all__ = [
    "Authenticator",
    "Chain",
    "ConfigurationError",
    "LoggingRequestLogger",
    "Middleware",
    "Next",
    "PermissionChecker",
    "Position",
    "Request",
    "RequestLogger",
    "Response",
    "Route",
    "Router",
    "RouterConfig",
    "RouterError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import apirouter`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from apirouter.router import Router

        return Router

    if name == "RouterConfig":
        from apirouter.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from apirouter.http.request import Request

        return Request

    if name == "Response":
        from apirouter.http.response import Response

        return Response

    if name == "Route":
        from apirouter.routing.route import Route

        return Route

    if name in ("Middleware", "Next", "Position"):
        from apirouter.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "Chain":
        from apirouter.middleware.chain import Chain

        return Chain

    if name in ("Authenticator", "LoggingRequestLogger", "PermissionChecker", "RequestLogger"):
        from apirouter import collaborators as _collab

        return getattr(_collab, name)

    if name in ("ConfigurationError", "RouterError"):
        from apirouter import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
