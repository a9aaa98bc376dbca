"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, trace_limit=20)
    """

    # Include exception code, message and trace in 500 responses
    debug: bool = False

    # Maximum number of stack frames in the debug trace (None = all)
    trace_limit: int | None = None

    # Log unhandled exceptions on the "apirouter.server" logger
    log_errors: bool = True
