"""HTTP response builder with chainable setters.

Unlike the request, the response is mutable: the gate, middleware and the
handler all write to the same instance during one dispatch, last writer
wins. ``send()`` hands the finished response to the host transport.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from apirouter._internal.invoke import invoke
from apirouter._internal.types import Sender


@dataclass(slots=True)
class Response:
    """A mutable HTTP response.

    Setters return the response so calls can be chained::

        response.set_status(201).set_json({"id": 7})

    Attributes:
        status_code: HTTP status, 200 until something changes it.
        headers: Response headers, insertion ordered.
        content: Encoded body.
        sender: Host transport hook called by ``send()``. ``None`` makes
            ``send()`` only mark the response as sent.
    """

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    sender: Sender | None = field(default=None, repr=False, compare=False)
    _sent: bool = field(default=False, repr=False, compare=False)

    # -- Chainable setters --

    def set_status(self, code: int) -> Response:
        """Set the status code."""
        self.status_code = code
        return self

    def set_header(self, name: str, value: str) -> Response:
        """Set a header, replacing any previous value."""
        self.headers[name] = value
        return self

    def set_json(self, data: Any) -> Response:
        """Encode *data* as compact JSON and set ``Content-Type``."""
        self.set_header("Content-Type", "application/json")
        self.content = json_module.dumps(data, separators=(",", ":"), default=str).encode(
            "utf-8"
        )
        return self

    def set_content(self, content: str | bytes) -> Response:
        """Replace the body. Strings are encoded as UTF-8."""
        self.content = content.encode("utf-8") if isinstance(content, str) else content
        return self

    # -- Accessors --

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.content.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.content)

    @property
    def sent(self) -> bool:
        """True once ``send()`` has completed."""
        return self._sent

    # -- Emission --

    async def send(self) -> None:
        """Hand the response to the sender. May only be called once."""
        if self._sent:
            msg = "Response has already been sent."
            raise RuntimeError(msg)
        self._sent = True
        if self.sender is not None:
            await invoke(self.sender, self)
