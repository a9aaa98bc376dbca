"""HTTP request snapshot.

Frozen metadata with lazily parsed body access. The request is honest about
what it is: received data that doesn't change. The single exception is
``attributes``, a per-request scratch mapping the router and middleware
write into (the router stores the authenticated user under ``"user"``).
"""

from __future__ import annotations

import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, unquote

from apirouter.http.headers import Headers
from apirouter.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``Request()`` is a ``GET /`` with no headers, query or body. Hosts
    normally use one of the factories: ``build()``, ``from_environ()``
    (WSGI) or ``from_asgi()``.
    """

    method: str = "GET"
    uri: str = "/"
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    body_bytes: bytes = b""
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    # Private: mutable cache for the parsed body
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    # -- Headers and query --

    def header(self, name: str) -> str | None:
        """Return a header value by case-insensitive name."""
        return self.headers.get(name)

    def param(self, key: str, default: str | None = None) -> str | None:
        """Return a query string parameter."""
        return self.query.get(key, default)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_json(self) -> bool:
        """True if the Content-Type announces a JSON body."""
        ct = self.content_type
        return ct is not None and "application/json" in ct.lower()

    # -- Body access --

    @property
    def raw_body(self) -> str:
        """The request body decoded as UTF-8."""
        return self.body_bytes.decode("utf-8", errors="replace")

    def body(self) -> dict[str, Any]:
        """Return the parsed request body.

        JSON bodies are parsed once and cached; a body that is not a JSON
        object (or not valid JSON at all) parses to ``{}``. Anything else
        is read as URL-encoded form data, first value per field.
        """
        if "_body" in self._cache:
            return self._cache["_body"]

        parsed: dict[str, Any]
        if self.is_json:
            try:
                data = json_module.loads(self.body_bytes or b"null")
            except ValueError:
                data = None
            parsed = data if isinstance(data, dict) else {}
        else:
            fields = parse_qs(self.raw_body, keep_blank_values=True)
            parsed = {name: values[0] for name, values in fields.items()}

        self._cache["_body"] = parsed
        return parsed

    def body_param(self, key: str, default: Any = None) -> Any:
        """Return a single field from the parsed body."""
        return self.body().get(key, default)

    # -- Attributes --

    def set_attribute(self, key: str, value: Any) -> Request:
        """Store a per-request attribute. Returns the request for chaining."""
        self.attributes[key] = value
        return self

    def get_attribute(self, key: str, default: Any = None) -> Any:
        """Return a per-request attribute, or *default*."""
        return self.attributes.get(key, default)

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str,
        target: str,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        body: str | bytes = b"",
    ) -> Request:
        """Create a Request from a method and a raw request target.

        The query string is split off *target* and the remaining path is
        percent-decoded::

            Request.build("GET", "/users/j%C3%B6rg?page=2")
            # uri="/users/jörg", query={"page": "2"}
        """
        path, _, query_string = target.partition("?")
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method,
            uri=unquote(path) or "/",
            headers=Headers(headers),
            query=QueryParams(query_string),
            body_bytes=body,
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> Request:
        """Create a Request from a WSGI environ dict.

        Reads ``wsgi.input`` up to ``CONTENT_LENGTH`` bytes.
        """
        headers: list[tuple[str, str]] = []
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                name = key[5:]
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
                name = key
            else:
                continue
            if value:
                headers.append((name.replace("_", "-").title(), str(value)))

        body = b""
        stream = environ.get("wsgi.input")
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if stream is not None and length > 0:
            body = stream.read(length)

        # PEP 3333 carries the path as latin-1 decoded bytes
        path = environ.get("PATH_INFO", "/").encode("latin-1").decode("utf-8", "replace")
        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            uri=path or "/",
            headers=Headers(headers),
            query=QueryParams(environ.get("QUERY_STRING", "")),
            body_bytes=body,
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and the full body."""
        headers = tuple(
            (name.decode("latin-1"), value.decode("latin-1"))
            for name, value in scope.get("headers", ())
        )
        return cls(
            method=scope["method"],
            uri=scope.get("path") or "/",
            headers=Headers(headers),
            query=QueryParams(scope.get("query_string", b"")),
            body_bytes=body,
        )
