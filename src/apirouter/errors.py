"""apirouter exception hierarchy.

Shared across the route table, the auth gate and the dispatcher so every
module raises and catches the same types.

Only wiring mistakes are exceptions here. A missing route, a missing user
or a missing permission are ordinary gate outcomes (404/401/403) and are
never raised.
"""


class RouterError(Exception):
    """Base for all apirouter-specific errors."""


class ConfigurationError(RouterError):
    """Raised when the router is wired incorrectly.

    Examples: a route requires authentication but no authenticator was
    given to the router, or a middleware is registered at an unknown
    position. ``Router.dispatch()`` never converts this into a 500 response;
    it propagates to the caller so the mistake fails loudly.
    """
