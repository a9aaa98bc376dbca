"""Test client for apirouter routers.

Dispatches through the real pipeline and returns the same ``Response`` the
host transport would have received. No sockets involved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.router import Router


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for apirouter routers.

    Usage::

        client = TestClient(router)
        response = await client.get("/users/42", headers={"Authorization": "Bearer t"})
        assert response.status_code == 200
        assert client.sent == [response]

    Every response the router sends is appended to ``sent``, in order.
    """

    __slots__ = ("router", "sent")

    def __init__(self, router: Router) -> None:
        self.router = router
        self.sent: list[Response] = []

    async def _capture(self, response: Response) -> None:
        self.sent.append(response)

    async def request(
        self,
        method: str,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
        json: Any = None,
    ) -> Response:
        """Build a request, dispatch it, and return the sent response."""
        import json as json_module

        header_map = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json)
            header_map.setdefault("Content-Type", "application/json")
        request = Request.build(method, target, headers=header_map, body=body)
        return await self.send(request)

    async def send(self, request: Request) -> Response:
        """Dispatch a prepared request and return the sent response."""
        return await self.router.dispatch(request, sender=self._capture)

    async def get(self, target: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", target, headers=headers)

    async def post(
        self,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
        json: Any = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", target, headers=headers, body=body, json=json)

    async def put(
        self,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
        json: Any = None,
    ) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", target, headers=headers, body=body, json=json)

    async def delete(self, target: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", target, headers=headers)
