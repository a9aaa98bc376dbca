"""Invoke helpers — call sync or async callables uniformly.

Handlers, authenticators, permission checkers, request loggers and senders
can be ``def`` or ``async def``. Any code that calls one of them must handle
both cases. This module provides a single helper so the sync/async check
lives in exactly one place.

Usage::

    from apirouter._internal.invoke import invoke

    result = await invoke(handler, request, response, params)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def show_user(request, response, params):
            response.set_json({"id": params["id"]})

        # async — returns coroutine, awaited automatically
        async def show_user(request, response, params):
            user = await load_user(params["id"])
            response.set_json(user)
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
