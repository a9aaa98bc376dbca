"""Tests for apirouter.routing.table — ordered route table and group prefixes."""

import pytest

from apirouter.routing.table import RouteTable


def _handler(request, response, params) -> None:
    pass


def _other(request, response, params) -> None:
    pass


class TestRegistration:
    def test_add_returns_route(self) -> None:
        table = RouteTable()
        route = table.add("GET", "/users", _handler)
        assert route.path == "/users"
        assert table.routes == (route,)

    def test_insertion_order_preserved(self) -> None:
        table = RouteTable()
        a = table.add("GET", "/a", _handler)
        b = table.add("POST", "/b", _handler)
        c = table.add("GET", "/c", _handler)
        assert table.routes == (a, b, c)


class TestGroups:
    def test_group_prefix(self) -> None:
        table = RouteTable()
        table.group("/api", lambda t: t.add("GET", "/users", _handler))
        assert [r.path for r in table.routes] == ["/api/users"]

    def test_trailing_slash_stripped(self) -> None:
        table = RouteTable()
        table.group("/api/", lambda t: t.add("GET", "/users", _handler))
        assert table.routes[0].path == "/api/users"

    def test_nested_groups_concatenate_outer_to_inner(self) -> None:
        table = RouteTable()

        def v1(t: RouteTable) -> None:
            t.add("GET", "/users", _handler)

        table.group("/api", lambda t: t.group("/v1", v1))
        assert table.routes[0].path == "/api/v1/users"

    def test_prefix_popped_after_group(self) -> None:
        table = RouteTable()
        table.group("/api", lambda t: t.add("GET", "/inside", _handler))
        outside = table.add("GET", "/outside", _handler)
        assert outside.path == "/outside"
        assert table.prefix == ""

    def test_prefix_popped_when_builder_raises(self) -> None:
        table = RouteTable()

        def broken(t: RouteTable) -> None:
            t.add("GET", "/ok", _handler)
            raise ValueError("boom")

        with pytest.raises(ValueError):
            table.group("/api", broken)
        assert table.prefix == ""

    def test_prefix_applied_at_registration_only(self) -> None:
        table = RouteTable()
        captured = []
        table.group("/a", lambda t: captured.append(t.add("GET", "/x", _handler)))
        table.group("/b", lambda t: t.add("GET", "/y", _handler))
        assert captured[0].path == "/a/x"

    def test_exact_concatenation_policy(self) -> None:
        table = RouteTable()
        table.group("/api", lambda t: t.add("GET", "users", _handler))
        assert table.routes[0].path == "/apiusers"

    def test_group_target(self) -> None:
        table = RouteTable()
        seen = []
        table.group("/api", seen.append, target="router")
        assert seen == ["router"]


class TestMatch:
    def test_match_captures_params(self) -> None:
        table = RouteTable()
        route = table.add("GET", "/users/{id}", _handler)
        match = table.match("GET", "/users/42")
        assert match is not None
        assert match.route is route
        assert match.params == {"id": "42"}

    def test_no_match(self) -> None:
        table = RouteTable()
        table.add("GET", "/users", _handler)
        assert table.match("GET", "/posts") is None

    def test_method_must_match(self) -> None:
        table = RouteTable()
        table.add("GET", "/users", _handler)
        assert table.match("POST", "/users") is None

    def test_method_case_insensitive(self) -> None:
        table = RouteTable()
        route = table.add("get", "/users", _handler)
        match = table.match("Get", "/users")
        assert match is not None
        assert match.route is route

    def test_first_registered_wins(self) -> None:
        table = RouteTable()
        first = table.add("GET", "/users/{id}", _handler)
        table.add("GET", "/users/me", _other)
        match = table.match("GET", "/users/me")
        assert match is not None
        assert match.route is first
        assert match.params == {"id": "me"}

    def test_same_path_different_methods(self) -> None:
        table = RouteTable()
        get = table.add("GET", "/users", _handler)
        post = table.add("POST", "/users", _other)
        assert table.match("GET", "/users").route is get  # type: ignore[union-attr]
        assert table.match("POST", "/users").route is post  # type: ignore[union-attr]

    def test_matches_do_not_share_params(self) -> None:
        table = RouteTable()
        table.add("GET", "/users/{id}", _handler)
        one = table.match("GET", "/users/1")
        two = table.match("GET", "/users/2")
        assert one is not None and two is not None
        assert one.params == {"id": "1"}
        assert two.params == {"id": "2"}
        assert one.route is two.route


class TestFreeze:
    def test_add_after_freeze_raises(self) -> None:
        table = RouteTable()
        table.freeze()
        with pytest.raises(RuntimeError, match="after the router has started"):
            table.add("GET", "/late", _handler)

    def test_group_after_freeze_raises(self) -> None:
        table = RouteTable()
        table.freeze()
        with pytest.raises(RuntimeError):
            table.group("/api", lambda t: None)

    def test_freeze_idempotent(self) -> None:
        table = RouteTable()
        table.freeze()
        table.freeze()
        assert table.frozen is True

    def test_match_after_freeze(self) -> None:
        table = RouteTable()
        table.add("GET", "/", _handler)
        table.freeze()
        assert table.match("GET", "/") is not None

    def test_freeze_closes_existing_routes(self) -> None:
        table = RouteTable()
        route = table.add("GET", "/", _handler)
        table.freeze()
        with pytest.raises(RuntimeError):
            route.require_auth()
        assert route.is_auth_required is False
