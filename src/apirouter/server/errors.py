"""Error boundary helpers.

Maps unexpected failures during routing, gating or the middleware chain to
a 500 response. Exception detail is only exposed in debug mode.
"""

import logging
import traceback
from typing import Any

from apirouter.config import RouterConfig
from apirouter.http.request import Request
from apirouter.http.response import Response

logger = logging.getLogger("apirouter.server")


def error_code(exc: BaseException) -> int:
    """Best-effort numeric code for *exc*.

    Uses an integer ``code`` or ``errno`` attribute when the exception has
    one, otherwise 0.
    """
    for attr in ("code", "errno"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def format_trace(exc: BaseException, limit: int | None = None) -> list[dict[str, Any]]:
    """Summarize the traceback of *exc* as JSON-friendly frames, innermost first."""
    frames = traceback.extract_tb(exc.__traceback__)
    frames.reverse()
    if limit is not None:
        frames = frames[:limit]
    return [
        {"file": frame.filename, "line": frame.lineno, "function": frame.name}
        for frame in frames
    ]


def debug_detail(exc: BaseException, config: RouterConfig) -> dict[str, Any]:
    """The ``debug`` object added to 500 bodies in debug mode."""
    return {
        "code": error_code(exc),
        "message": str(exc),
        "trace": format_trace(exc, config.trace_limit),
    }


def handle_internal_error(
    exc: Exception,
    request: Request,
    response: Response,
    config: RouterConfig,
) -> None:
    """Turn *response* into a 500 for an unexpected exception."""
    if config.log_errors:
        logger.exception("500 %s %s", request.method, request.uri)

    body: dict[str, Any] = {"error": "Internal Server Error"}
    if config.debug:
        body["debug"] = debug_detail(exc, config)

    response.set_status(500).set_json(body)
