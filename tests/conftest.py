"""Shared collaborators and fixtures for apirouter tests."""

from dataclasses import dataclass

import pytest

from apirouter.audit import set_security_event_sink
from apirouter.http.request import Request
from apirouter.http.response import Response


@dataclass(frozen=True, slots=True)
class FakeUser:
    """A minimal user model."""

    id: str
    permissions: frozenset[str] = frozenset()


USERS: dict[str, FakeUser] = {
    "tok_alice": FakeUser(id="alice"),
    "tok_bob": FakeUser(id="bob", permissions=frozenset({"admin"})),
}


class TokenAuthenticator:
    """Resolves ``Authorization: Bearer <token>`` against USERS."""

    def authenticate(self, request: Request) -> FakeUser | None:
        header = request.header("Authorization") or ""
        scheme, _, token = header.partition(" ")
        if scheme != "Bearer":
            return None
        return USERS.get(token)


class AsyncTokenAuthenticator(TokenAuthenticator):
    async def authenticate(self, request: Request) -> FakeUser | None:  # type: ignore[override]
        return TokenAuthenticator.authenticate(self, request)


class SetPermissions:
    def has_permission(self, user: FakeUser, permission: str) -> bool:
        return permission in user.permissions


class RecordingLogger:
    """Records every log_request call, plus whether the response was sent by then."""

    def __init__(self) -> None:
        self.calls: list[tuple[Request, Response, float, object]] = []
        self.sent_at_call: list[bool] = []

    def log_request(self, request, response, elapsed, user=None) -> None:
        self.calls.append((request, response, elapsed, user))
        self.sent_at_call.append(response.sent)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def _no_security_sink():
    set_security_event_sink(None)
    yield
    set_security_event_sink(None)
